import uvicorn

from .settings import Settings


def main():
    settings = Settings()
    uvicorn.run(
        'stockly.main:app',
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == '__main__':
    main()
