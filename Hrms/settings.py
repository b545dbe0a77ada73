"""
Django settings for Hrms project.
"""

# django-environ reads values from .env
import environ
from pathlib import Path
import os

BASE_DIR = Path(__file__).resolve().parent.parent


# Typed defaults. Secrets (SECRET_KEY in production, REVEAL_PASSWORD, DB credentials)
# are expected to come from .env.
env = environ.Env(
    DEBUG=(bool, False),
    LOG_LEVEL=(str, "INFO"),
    AWARD_MIN_YEAR=(int, 2020),
    AWARD_RANKING_SCORE=(str, "lifetime"),
)

# Load .env
environ.Env.read_env(os.path.join(BASE_DIR, ".env"))

# ========== Debug ==========
DEBUG = env("DEBUG")
SECRET_KEY = env("SECRET_KEY", default="django-insecure-hrms-dev-key-change-me")
ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["127.0.0.1", "localhost", "testserver"])

# ========== Database ==========
# SQLite for local development; production points DATABASE_URL at PostgreSQL.
DATABASES = {
    "default": env.db("DATABASE_URL", default=f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
}


# -------------------------------------------------
# Applications
# -------------------------------------------------
INSTALLED_APPS = [
    # Django
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Project apps
    "base.apps.BaseConfig",
    "hr.apps.HrConfig",
    "recruitment.apps.RecruitmentConfig",
    "performance.apps.PerformanceConfig",
    "awards.apps.AwardsConfig",
]

# -------------------------------------------------
# Middleware
# -------------------------------------------------
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

# -------------------------------------------------
# URLs / WSGI
# -------------------------------------------------
ROOT_URLCONF = "Hrms.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [os.path.join(BASE_DIR, "templates")],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

WSGI_APPLICATION = "Hrms.wsgi.application"


# -------------------------------------------------
# Auth
# -------------------------------------------------
# Every page and API endpoint (except health) requires a logged-in user.
LOGIN_URL = "/admin/login/"
LOGIN_REDIRECT_URL = "/"

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Password that unlocks full ID-card numbers in list/detail views.
REVEAL_PASSWORD = env("REVEAL_PASSWORD", default="")

# -------------------------------------------------
# I18N / TZ
# -------------------------------------------------
LANGUAGE_CODE = "zh-hans"
TIME_ZONE = env("TIME_ZONE", default="Asia/Shanghai")
USE_I18N = True
USE_TZ = True

# -------------------------------------------------
# Static
# -------------------------------------------------
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# -------------------------------------------------
# Logging
# -------------------------------------------------
LOG_LEVEL = env("LOG_LEVEL")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "root": {"handlers": ["console"], "level": LOG_LEVEL},
    "loggers": {
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
    },
}

# -------------------------------------------------
# Annual awards
# -------------------------------------------------
# Ordered highest tier first. quota = number of ranks, bonus = fixed amount per winner.
AWARD_TIERS = env.json(
    "AWARD_TIERS",
    default=[
        {"level": "special", "quota": 1, "bonus": 5000},
        {"level": "first", "quota": 2, "bonus": 3000},
        {"level": "second", "quota": 3, "bonus": 2000},
        {"level": "excellent", "quota": 5, "bonus": 1000},
    ],
)

# "lifetime" ranks by Employee.total_score, "yearly" by the sum of the year's score events.
AWARD_RANKING_SCORE = env("AWARD_RANKING_SCORE")
AWARD_MIN_YEAR = env("AWARD_MIN_YEAR")

# Printed on award certificates
CERTIFICATE_ISSUER = env("CERTIFICATE_ISSUER", default="呈尚策划有限公司")
CERTIFICATE_SUBTITLE = env("CERTIFICATE_SUBTITLE", default="呈尚策划人事管理系统")

# -------------------------------------------------
# API
# -------------------------------------------------
PAGINATION_DEFAULT_LIMIT = 10
PAGINATION_MAX_LIMIT = 100
