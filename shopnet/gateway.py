import threading

from flask import Flask, Response, jsonify, request
import requests

from shopnet.config import gateway_settings
from shopnet.tracing import get_tracer, setup_tracing

tracer = get_tracer(__name__)

# Connection-scoped headers; requests and werkzeug set their own.
HOP_BY_HOP = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailers",
    "transfer-encoding",
    "upgrade",
    "host",
    "content-length",
}


def forward_headers(headers):
    return {k: v for k, v in headers.items() if k.lower() not in HOP_BY_HOP}


def create_app(config=None, session=None):
    app = Flask(__name__)
    app.config.from_mapping(gateway_settings())
    if config:
        app.config.from_mapping(config)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    setup_tracing(app)
    # requests.Session is not thread-safe; the threaded server gets one per thread.
    local = threading.local()

    def get_session():
        if session is not None:
            return session
        if not hasattr(local, "session"):
            local.session = requests.Session()
        return local.session

    @app.route('/health')
    def health():
        return jsonify({"status": "healthy", "service": "api-gateway"})

    @app.route('/api', defaults={"path": ""}, methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    @app.route('/api/<path:path>', methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
    def proxy(path):
        url = f"{app.config['BACKEND_URL']}/api/{path}"

        with tracer.start_as_current_span("gateway.forward") as span:
            span.set_attribute("http.method", request.method)
            span.set_attribute("http.route", request.path)
            try:
                upstream = get_session().request(
                    request.method,
                    url,
                    params=request.args.to_dict(flat=False),
                    data=request.get_data(),
                    headers=forward_headers(request.headers),
                    timeout=app.config["GATEWAY_TIMEOUT"],
                    allow_redirects=False,
                )
            except requests.exceptions.RequestException as e:
                app.logger.error(f"{request.method} {request.path} -> {url} failed: {e}")
                return jsonify({"error": "backend unavailable"}), 503
            span.set_attribute("http.status_code", upstream.status_code)

        app.logger.info(f"{request.method} {request.path} -> {upstream.status_code}")
        response = Response(upstream.content, status=upstream.status_code)
        if "Content-Type" in upstream.headers:
            response.headers["Content-Type"] = upstream.headers["Content-Type"]
        return response

    return app


def main():
    app = create_app()
    app.run(host='0.0.0.0', port=app.config["PORT"])


if __name__ == '__main__':
    main()
