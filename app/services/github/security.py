import hmac
import hashlib

SIGNATURE_PREFIX = "sha256="


def verify_signature(
    payload_body: bytes, secret_token: str, signature_header: str
) -> bool:
    """
    Verify that the payload was sent from GitHub by validating the SHA256 signature.

    Args:
        payload_body: raw request body bytes
        secret_token: the webhook secret
        signature_header: the X-Hub-Signature-256 header value

    Returns:
        True if the signature is valid, False otherwise.
    """
    if not signature_header or not signature_header.startswith(SIGNATURE_PREFIX):
        # Missing or malformed header is a rejection, never a skipped check.
        return False

    hash_object = hmac.new(
        secret_token.encode("utf-8"), msg=payload_body, digestmod=hashlib.sha256
    )
    expected_signature = SIGNATURE_PREFIX + hash_object.hexdigest()

    # compare_digest on bytes: constant time, and non-ASCII headers compare unequal
    return hmac.compare_digest(
        expected_signature.encode("utf-8"), signature_header.encode("utf-8")
    )
