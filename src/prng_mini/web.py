"""
Small HTTP service exposing the prng-mini generators as JSON endpoints.

Endpoints:
- GET  /health
- GET  /guid
- GET  /hex-id?size=32
- GET  /random-int?min=1&max=6&count=1
- GET  /license-key?signature=210  (or ?product=name), optional &alphabet=hex
- POST /license-key/validate  {"key": ..., "signature": ..., "alphabet": ...}

Run with `python -m prng_mini.web` for local testing.
"""

import logging

from flask import Flask, jsonify, request

from .config import configure_logging, load_settings
from .core import (
    AllocationFailure,
    ChecksumMismatch,
    EntropyReadIncomplete,
    EntropySourceUnavailable,
    InvalidArgument,
    generate_guid_v4,
    generate_hex_id,
    generate_license_key,
    get_alphabet,
    get_random_integers,
    validate_license_key,
)
from .utils.signatures import derive_signature

logger = logging.getLogger(__name__)

app = Flask(__name__)


###############################################################################
# Helpers
###############################################################################


def _int_arg(name: str, default=None, required: bool = False):
    raw = request.args.get(name, "")
    if raw == "":
        if required:
            raise InvalidArgument(f"Query parameter '{name}' is required")
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidArgument(f"Query parameter '{name}' must be an integer: {raw}") from None


def _signature_for(alphabet, product, signature) -> int:
    if product:
        return derive_signature(product, alphabet)
    if signature is None:
        return load_settings().default_signature
    return signature


###############################################################################
# Error handlers
###############################################################################


@app.errorhandler(InvalidArgument)
def handle_invalid_argument(exc):
    return jsonify({"error": str(exc), "code": exc.code}), 400


@app.errorhandler(EntropySourceUnavailable)
@app.errorhandler(EntropyReadIncomplete)
def handle_entropy_error(exc):
    logger.warning("Entropy failure while serving %s: %s", request.path, exc)
    return jsonify({"error": "Entropy source unavailable", "code": exc.code}), 503


@app.errorhandler(AllocationFailure)
@app.errorhandler(ChecksumMismatch)
def handle_internal_error(exc):
    logger.error("Internal error while serving %s: %s", request.path, exc)
    return jsonify({"error": str(exc), "code": exc.code}), 500


###############################################################################
# Routes
###############################################################################


@app.route("/health")
def health():
    """Simple health check endpoint."""
    return "OK", 200


@app.route("/guid")
def guid():
    return jsonify({"guid": generate_guid_v4()})


@app.route("/hex-id")
def hex_id():
    size = _int_arg("size", 32)
    return jsonify({"id": generate_hex_id(size)})


@app.route("/random-int")
def random_int():
    min_value = _int_arg("min", required=True)
    max_value = _int_arg("max", required=True)
    count = _int_arg("count", 1)
    values = get_random_integers(count, min_value, max_value)
    return jsonify({"min": min_value, "max": max_value, "values": values})


@app.route("/license-key")
def license_key():
    alphabet = get_alphabet(request.args.get("alphabet", "alnum"))
    signature = _signature_for(
        alphabet,
        request.args.get("product"),
        _int_arg("signature"),
    )
    key = generate_license_key(signature, alphabet)
    return jsonify({"key": key, "signature": signature, "alphabet": alphabet.name})


@app.route("/license-key/validate", methods=["POST"])
def license_key_validate():
    data = request.get_json(silent=True) or {}
    alphabet = get_alphabet(data.get("alphabet", "alnum"))
    signature = data.get("signature")
    if signature is not None and (isinstance(signature, bool) or not isinstance(signature, int)):
        raise InvalidArgument("signature must be an integer")
    signature = _signature_for(alphabet, data.get("product"), signature)

    # Missing or malformed keys are simply invalid
    valid = validate_license_key(data.get("key"), signature, alphabet)
    return jsonify({"valid": valid, "signature": signature})


if __name__ == "__main__":
    configure_logging()
    # Running via `python -m prng_mini.web` for convenience.
    app.run(debug=False)
