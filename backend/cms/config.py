import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    CMS_LOG_LEVEL = os.getenv("CMS_LOG_LEVEL", "INFO")
    CMS_SEARCH_MIN_TERM_LENGTH = int(os.getenv("CMS_SEARCH_MIN_TERM_LENGTH", "3"))
    # Negative access means "inherit from the parent page"
    CMS_DEFAULT_ACCESS = int(os.getenv("CMS_DEFAULT_ACCESS", "-100"))

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    CMS_LOG_LEVEL = os.getenv("CMS_LOG_LEVEL", "DEBUG")
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///cms-dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
