import re
import os.path

import dj_database_url
from configurations import Configuration


BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def get_bool(name, default):
    return os.getenv(name, str(default)).lower() == "true"


def get_intOrNone(name, default):
    """Parses the env variable, accepts ints and literal None"""
    value = os.getenv(name, str(default))
    if value.lower() == "none":
        return None
    return int(value)


class BaseConfig(Configuration):

    DEBUG = get_bool("DEBUG", False)

    ADMINS = re.findall(r"\s*([^<]+) <([^>]+)>\s*", os.getenv("ADMINS", ""))

    MANAGERS = ADMINS

    DATABASES = {
        "default": dj_database_url.config(
            default="sqlite:///" + os.path.join(BASE_DIR, "..", "podsync.sqlite")
        )
    }

    DEFAULT_AUTO_FIELD = "django.db.models.AutoField"

    CACHES = {
        "default": {
            "BACKEND": os.getenv(
                "CACHE_BACKEND", "django.core.cache.backends.locmem.LocMemCache"
            ),
            "LOCATION": os.getenv("CACHE_LOCATION", ""),
        }
    }

    TIME_ZONE = "UTC"

    USE_TZ = True

    LANGUAGE_CODE = "en-us"

    USE_I18N = False

    STATIC_ROOT = "staticfiles"
    STATIC_URL = "/static/"

    TEMPLATES = [
        {
            "BACKEND": "django.template.backends.django.DjangoTemplates",
            "DIRS": [],
            "APP_DIRS": True,
            "OPTIONS": {
                "debug": DEBUG,
                "context_processors": [
                    "django.contrib.auth.context_processors.auth",
                    "django.template.context_processors.debug",
                    "django.template.context_processors.request",
                    "django.contrib.messages.context_processors.messages",
                ],
            },
        }
    ]

    MIDDLEWARE = [
        "django.middleware.common.CommonMiddleware",
        "django.middleware.csrf.CsrfViewMiddleware",
        "django.contrib.sessions.middleware.SessionMiddleware",
        "django.contrib.auth.middleware.AuthenticationMiddleware",
        "django.contrib.messages.middleware.MessageMiddleware",
    ]

    ROOT_URLCONF = "podsync.urls"

    INSTALLED_APPS = [
        "django.contrib.contenttypes",
        "django.contrib.messages",
        "django.contrib.admin",
        "django.contrib.auth",
        "django.contrib.sessions",
        "django.contrib.staticfiles",
        "podsync.core",
        "podsync.users",
        "podsync.subscriptions",
        "podsync.history",
        "podsync.api",
    ]

    SESSION_ENGINE = "django.contrib.sessions.backends.cached_db"

    # gpodder clients expect this exact cookie name
    SESSION_COOKIE_NAME = "sessionid"

    SESSION_COOKIE_AGE = int(os.getenv("SESSION_COOKIE_AGE", 60 * 60 * 24 * 365))

    # unknown API paths must answer 404, not redirect
    APPEND_SLASH = False

    SECRET_KEY = os.getenv("SECRET_KEY", "")

    ALLOWED_HOSTS = ["*"]

    _LOGGING = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "verbose": {"format": "%(asctime)s %(name)s %(levelname)s %(message)s"}
        },
        "handlers": {
            "console": {
                "level": os.getenv("LOGGING_CONSOLE_LEVEL", "DEBUG"),
                "class": "logging.StreamHandler",
                "formatter": "verbose",
            }
        },
        "loggers": {
            "django": {
                "handlers": os.getenv("LOGGING_DJANGO_HANDLERS", "console").split(),
                "propagate": True,
                "level": os.getenv("LOGGING_DJANGO_LEVEL", "WARN"),
            },
            "podsync": {
                "handlers": os.getenv("LOGGING_PODSYNC_HANDLERS", "console").split(),
                "level": os.getenv("LOGGING_PODSYNC_LEVEL", "INFO"),
            },
        },
    }

    _use_log_file = bool(os.getenv("LOGGING_FILENAME", False))

    @property
    def LOGGING(self):
        if self._use_log_file:
            self._LOGGING["handlers"]["file"] = {
                "level": "INFO",
                "class": "logging.handlers.RotatingFileHandler",
                "filename": os.getenv("LOGGING_FILENAME"),
                "maxBytes": 10_000_000,
                "backupCount": 10,
                "formatter": "verbose",
            }
        return self._LOGGING

    DATA_UPLOAD_MAX_MEMORY_SIZE = get_intOrNone("DATA_UPLOAD_MAX_MEMORY_SIZE", None)

    # we're running behind a proxy that sets the X-Forwarded-Proto header correctly
    # see https://docs.djangoproject.com/en/dev/ref/settings/#secure-proxy-ssl-header
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")


class Local(BaseConfig):
    DEBUG = get_bool("DEBUG", True)

    SECRET_KEY = os.getenv("SECRET_KEY", "local")


class Test(BaseConfig):
    SECRET_KEY = "test"

    DATABASES = {"default": dj_database_url.parse("sqlite://:memory:")}

    PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

    _LOGGING = dict(BaseConfig._LOGGING, loggers={})


class Prod(BaseConfig):
    ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "127.0.0.1,localhost").split(",")
    SESSION_COOKIE_SECURE = True
    CSRF_COOKIE_SECURE = True
    SECURE_HSTS_SECONDS = 31536000
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True

    @classmethod
    def post_setup(cls):
        """Sentry initialization"""
        super(Prod, cls).post_setup()
        sentry_dsn = os.getenv("SENTRY_DSN", "")
        if not sentry_dsn:
            return

        import sentry_sdk
        from sentry_sdk.integrations.django import DjangoIntegration

        sentry_sdk.init(
            dsn=sentry_dsn, integrations=[DjangoIntegration()], send_default_pii=False
        )
