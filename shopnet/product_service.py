from flask import Flask, jsonify

from shopnet.config import backend_settings
from shopnet.products import products
from shopnet.store import ProductStore
from shopnet.tracing import setup_tracing


def create_app(config=None, store=None):
    app = Flask(__name__)
    app.config.from_mapping(backend_settings())
    if config:
        app.config.from_mapping(config)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    setup_tracing(app)

    # One client per app; redis-py pools the connections underneath.
    app.extensions["product_store"] = store or ProductStore.from_config(app.config)
    app.register_blueprint(products, url_prefix="/api/products")

    @app.route("/health")
    @app.route("/api/health")
    def health():
        # A store outage is reported, not raised
        if app.extensions["product_store"].ping():
            redis_status = "connected"
        else:
            app.logger.error("Redis connection error during health check")
            redis_status = "disconnected"
        return jsonify({"status": "healthy", "service": "product-service", "redis": redis_status})

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "server error"}), 500

    return app


def main():
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"])


if __name__ == "__main__":
    main()
