# quizgen/__main__.py
import uvicorn

from quizgen.utils.config import settings

if __name__ == "__main__":
    uvicorn.run("quizgen.main:app", host=settings.host, port=settings.port)
