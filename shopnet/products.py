import math
import numbers

from flask import Blueprint, current_app, jsonify, request

from shopnet.errors import InvalidInput, StoreFailure
from shopnet.tracing import get_tracer

products = Blueprint("products", __name__)
tracer = get_tracer(__name__)

# Characters JavaScript's String.prototype.trim removes. str.strip() differs:
# it keeps U+FEFF and drops the \x1c-\x1f separators and \x85.
TRIM_CHARS = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)

# Same entities as validator.js escape()
HTML_ESCAPES = str.maketrans({
    "&": "&amp;",
    '"': "&quot;",
    "'": "&#x27;",
    "<": "&lt;",
    ">": "&gt;",
    "/": "&#x2F;",
    "\\": "&#x5C;",
    "`": "&#96;",
})


def escape_html(value):
    return value.translate(HTML_ESCAPES)


def _is_valid_price(price):
    # bool is an int subclass, but true/false are not prices
    if isinstance(price, bool) or not isinstance(price, numbers.Real):
        return False
    try:
        as_float = float(price)
    except OverflowError:
        # Integers past the float range
        return False
    return math.isfinite(as_float) and price >= 0


def validate_product(payload):
    """Check a create payload and return the (name, price) to store.

    The name is trimmed and HTML-escaped. The price is returned untouched.
    """
    if not isinstance(payload, dict):
        payload = {}

    name = payload.get("name")
    if not isinstance(name, str) or not name.strip(TRIM_CHARS):
        raise InvalidInput("Invalid name", field="name")

    price = payload.get("price")
    if not _is_valid_price(price):
        raise InvalidInput("Invalid price", field="price")

    return escape_html(name.strip(TRIM_CHARS)), price


def get_store():
    return current_app.extensions["product_store"]


@products.route("/", methods=["POST"], strict_slashes=False)
def create_product():
    name, price = validate_product(request.get_json(silent=True))

    with tracer.start_as_current_span("products.create") as span:
        saved = get_store().create(name, price)
        span.set_attribute("product.id", saved["id"])

    current_app.logger.info(f"Product saved: {saved}")
    return jsonify(saved), 201


@products.route("/", methods=["GET"], strict_slashes=False)
def list_products():
    with tracer.start_as_current_span("products.list") as span:
        items = get_store().list_all()
        span.set_attribute("product.count", len(items))

    return jsonify(items)


@products.errorhandler(InvalidInput)
def handle_invalid_input(e):
    current_app.logger.warning(f"{request.method} {request.path} rejected: {e.message}")
    return jsonify({"error": e.message}), 400


@products.errorhandler(StoreFailure)
def handle_store_failure(e):
    current_app.logger.exception(f"{request.method} {request.path} error: {e}")
    return jsonify({"error": "server error"}), 500
