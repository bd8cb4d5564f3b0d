import uvicorn

from practice_tracker.config import settings


def main() -> None:
    uvicorn.run("practice_tracker.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
