# quizgen/services/certification_policy.py
from dataclasses import dataclass
from typing import Dict, Optional

@dataclass(frozen=True)
class CertificationPolicy:
    """Validation rules that vary by certification."""
    min_options: int = 4
    # Appended when exactly min_options remain and that is fewer than four
    placeholder_option: Optional[str] = None

DEFAULT_POLICY = CertificationPolicy()

CERTIFICATION_POLICIES: Dict[str, CertificationPolicy] = {
    "CFP": CertificationPolicy(min_options=3, placeholder_option="None of the above"),
}

def get_certification_policy(certification: str) -> CertificationPolicy:
    """Returns the policy for a certification, or the default one."""
    return CERTIFICATION_POLICIES.get(certification.strip().upper(), DEFAULT_POLICY)
