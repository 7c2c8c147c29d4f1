from os import getenv


def _flag(name: str, default: str) -> bool:
    return getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://tasklinks:tasklinks@db:5432/tasklinks")
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")
    # la suppression d'un lien ne publie rien par défaut
    TASKLINK_PUBLISH_ON_REMOVE = _flag("TASKLINK_PUBLISH_ON_REMOVE", "false")
    SEED_DEFAULT_RELATIONS = _flag("SEED_DEFAULT_RELATIONS", "true")

settings = Settings()
