import os


def _env_bool(name, default="false"):
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


def backend_settings():
    # Docker networking resolves REDIS_HOST to the redis container.
    return {
        "REDIS_HOST": os.environ.get("REDIS_HOST", "localhost"),
        "REDIS_PORT": int(os.environ.get("REDIS_PORT", "6379")),
        "REDIS_DB": int(os.environ.get("REDIS_DB", "0")),
        "REDIS_PASSWORD": os.environ.get("REDIS_PASSWORD") or None,
        "PORT": int(os.environ.get("PORT", "5000")),
        "LOG_LEVEL": os.environ.get("LOG_LEVEL", "INFO").upper(),
        "OTEL_ENABLED": _env_bool("OTEL_ENABLED"),
        "OTEL_SERVICE_NAME": os.environ.get("OTEL_SERVICE_NAME", "product-service"),
    }


def gateway_settings():
    # The backend is only reachable on the private network, by service name.
    return {
        "BACKEND_URL": os.environ.get("BACKEND_URL", "http://backend:5000").rstrip("/"),
        "GATEWAY_TIMEOUT": float(os.environ.get("GATEWAY_TIMEOUT", "5")),
        "PORT": int(os.environ.get("PORT", "3000")),
        "LOG_LEVEL": os.environ.get("LOG_LEVEL", "INFO").upper(),
        "OTEL_ENABLED": _env_bool("OTEL_ENABLED"),
        "OTEL_SERVICE_NAME": os.environ.get("OTEL_SERVICE_NAME", "api-gateway"),
    }
