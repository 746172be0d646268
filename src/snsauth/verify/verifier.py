"""SNS message signature verification.

Steps, each a hard gate (the first failure wins):

1. signature version must be the supported one (``"1"``)
2. the claimed signature must be valid base64
3. fetch the signing certificate (one GET, no cache, no retry)
4. the body must contain a PEM block
5. the PEM payload must be an X.509 certificate
6. RSA/SHA-1 verification of the canonical bytes with its public key

:meth:`SignatureVerifier.verify_message` additionally runs the
certificate origin check first, and is the entry point to use for
payloads straight off the wire.
"""

from __future__ import annotations

from snsauth.protocol.crypto import decode_signature, load_certificate, verify_sha1_rsa
from snsauth.protocol.errors import InvalidSignatureVersionError
from snsauth.protocol.message import (
    MessageSignature,
    Notification,
    SubscriptionConfirmation,
)
from snsauth.verify.cert_url import validate_cert_url
from snsauth.verify.config import VerifierConfig
from snsauth.verify.transport import Fetcher


class SignatureVerifier:
    """Checks SNS signatures with certificates fetched through *fetcher*.

    Holds only the fetcher and the immutable config, so one instance can
    serve concurrent requests.
    """

    def __init__(self, fetcher: Fetcher, config: VerifierConfig | None = None) -> None:
        self._fetcher = fetcher
        self._config = config or VerifierConfig()

    @property
    def config(self) -> VerifierConfig:
        return self._config

    def check_signature(self, sig: MessageSignature) -> None:
        """Verify *sig*, whose certificate URL must already be origin-checked.

        Raises:
            InvalidSignatureVersionError: Unsupported ``SignatureVersion``.
            SignatureDecodeError: ``Signature`` is not base64.
            FetchError: The certificate could not be fetched.
            InvalidCertBodyError: The fetched body has no PEM block.
            CertificateParseError: The PEM block is not an X.509 certificate.
            InvalidSignatureError: The signature does not verify.
        """
        if sig.signature_version != self._config.signature_version:
            raise InvalidSignatureVersionError()

        signature = decode_signature(sig.signature)
        resp = self._fetcher.get(sig.signing_cert_url)
        certificate = load_certificate(resp.content)
        verify_sha1_rsa(certificate, sig.signed, signature)

    def verify_message(self, message: Notification | SubscriptionConfirmation) -> None:
        """Origin-check the certificate URL of *message*, then its signature.

        Nothing is fetched unless the origin check passes.

        Raises:
            CertURLError: The certificate URL is not a trusted SNS location.
            SNSAuthError: Any failure from :meth:`check_signature`.
        """
        validate_cert_url(message.signing_cert_url, self._config)
        self.check_signature(message.message_signature())
