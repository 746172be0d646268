"""Shared fixtures for snsauth tests.

The certificate and signatures are real RSA/SHA-1 signatures over SNS
canonical strings, so signature checks run the actual crypto.  Only the
network is faked.
"""

from __future__ import annotations

import base64
import dataclasses
from datetime import datetime, timedelta, timezone

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.x509.oid import NameOID

from snsauth.protocol.canonical import canonicalize
from snsauth.protocol.errors import FetchError
from snsauth.protocol.message import Notification, SubscriptionConfirmation
from snsauth.verify.transport import Fetcher, FetchResponse

CERT_URL = "https://sns.us-west-2.amazonaws.com/SimpleNotificationService-f3ecfb7224c7233fe7bb5f59f96de52f.pem"

CERT_PEM = b"""\
-----BEGIN CERTIFICATE-----
MIIDyDCCArACCQDWjKayfhZXGDANBgkqhkiG9w0BAQUFADCBpDELMAkGA1UEBhMC
VVMxEzARBgNVBAgMCldhc2hpbmd0b24xEDAOBgNVBAcMB1NlYXR0bGUxHDAaBgNV
BAoME0V4YW1wbGUgQ29ycG9yYXRpb24xEjAQBgNVBAsMCU1hcmtldGluZzEYMBYG
A1UEAwwPd3d3LmV4YW1wbGUuY29tMSIwIAYJKoZIhvcNAQkBFhNzb21lb25lQGV4
YW1wbGUuY29tMCAXDTIyMDExNTA2MjcxNVoYDzIxMjExMjIyMDYyNzE1WjCBpDEL
MAkGA1UEBhMCVVMxEzARBgNVBAgMCldhc2hpbmd0b24xEDAOBgNVBAcMB1NlYXR0
bGUxHDAaBgNVBAoME0V4YW1wbGUgQ29ycG9yYXRpb24xEjAQBgNVBAsMCU1hcmtl
dGluZzEYMBYGA1UEAwwPd3d3LmV4YW1wbGUuY29tMSIwIAYJKoZIhvcNAQkBFhNz
b21lb25lQGV4YW1wbGUuY29tMIIBIjANBgkqhkiG9w0BAQEFAAOCAQ8AMIIBCgKC
AQEAuPysDbyweqaP99HQJM1jP3jXrbvndetPXnHxoxsg2vlLsbZ9lcH3KqqEUTd7
8JgulOWF6mtcBpIPEdJtXkw2wAFDz2AokCJ49QaNUEn79p2yrdNzvZNWS+S2X53Q
g8Bjq0amFnqx9x4R2po4NqZcgBu3f1Pc3vQ0z4eKagW7OmGudxatx0A6jXV4U2bF
8zZrwWtYjCkhsy5hNgnxiANR14AxP2N14GlWl1fl3o7EZye2Z8KV7QeuUy4HSnMB
+Nv5lvbYWaUxUSf130Ls/8LIzQWA58WozyTERYGkeG+NWq2vdquDEF6iPBSYTYZi
l8bzq8ovgI5SCCxDSCuvsJvnuwIDAQABMA0GCSqGSIb3DQEBBQUAA4IBAQAof9y/
A2F6qpxVQDJAtAKHRJRXdeZKdhUyAIYMzCVDJJD4vdr8mpg1AnXgUu4ilLJgyJ3e
9ZOpuvfIVZ4R/GzL58Stb+4EiKIoZnFse1zlQRgHj96J9RD8Bov1RwBmNpxZYoVv
o8qjEJfnB9OVfb5ISX/KmArL3Z+uxZ29Iosm04lLVxukeiIccbD6/24d75ptjrSo
253nyYGaLiATF35xTgu9DDHwNwG1vgGxsZ3g0Uio7/34uVUWa9LsZ08Vjtjm0GYr
/pq3fArHBzkGiwy+l7akZ+C4tK68Vyk4Un+uCzG0nVqaODADeKFSC/E7OL3Gee8x
aG+fmXds0GMne+zb
-----END CERTIFICATE-----
"""

# Signature over the "My First Message" notification below
NOTIFICATION_SIGNATURE = (
    "cwMmnINV7NWn5wb4o1faQx9QZBOEpSaJaA86Asdkrpr9C0rdkI/RnyUNl5DrqmueaCiCImuy4Jh0CNeOzqXEdv6WuBjUPbQT/YyAb1h00VVqvjyOvsl2kq+7B3bTfNEahHFZJS2Xh0AtwtWENt159iNnlIRD5NSeVlRyicVv2mgCgK9qxLGGyOFESk43sqUnx5abr0mDR2oFRgbWgwHOly3bQjoaXCfrFYXbmEpz9mMScxoOcRgAUqGVkNLzNBDPU4d9OiBwHxifZBfA6AB3ZxoLm/IZXQJCoK7g44O3NjBCC5nnaMDnHJm1TeSqwVXx8MQQ+8LHhcLbghKkPvo33g=="
)

# Signature over the topic-01 notification body (no Subject)
TOPIC01_SIGNATURE = (
    "HpJZNo/GIQHutIh3X8KWie9y5cE97WS6/dI4zzaZJd/mneFhCgg9m7QlSDFgvtCF253TefIsnydNxfGH3gQ5HcPsWHfeNDukhDVe86i4tjz/sBl4hbS7BLj9MMP5+6x/XaNaB/xbgQp2AdP6BJRxsGZlbnvZwNJUoOjMPjdZaIAvSle04LRarWmc6xFZBv4JSJ7w9nK8a6I2bg56oR35dpOv4GyDQbSuIohxikoNs9OFqTlUi3TxK0pDZE8CyTQG5KW10SIHrG7FWWBc3KVYujfUi7UbFbYLhMQVMG6yfcUrZmbyQyz3uZF3KEiRDkj8yOPVdLasvPXW/th3mGuudg=="
)

TOPIC01_ARN = "arn:aws:sns:ap-northeast-1:000000000000:topic-01"

# Placeholder signature from the SNS documentation (never verifies)
EXAMPLE_SIGNATURE = (
    "EXAMPLEpH+DcEwjAPg8O9mY8dReBSwksfg2S7WKQcikcNKWLQjwu6A4VbeS0QHVCkhRS7fUQvi2egU3N858fiTDN6bkkOxYDVrY0Ad8L10Hs3zH81mtnPk5uvvolIC1CXGu43obcgFxeL3khZl8IKvO61GWB6jI9b5+gLPoBc1Q="
)


class FakeFetcher(Fetcher):
    """In-memory :class:`Fetcher` that records every URL it is asked for.

    Returns responses[url] when present, otherwise default.  If
    error is set, every call raises it instead.
    """

    def __init__(
        self,
        default: FetchResponse | None = None,
        responses: dict[str, FetchResponse] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.default = default or FetchResponse(status_code=200, content=CERT_PEM)
        self.responses = responses or {}
        self.error = error
        self.calls: list[str] = []

    def get(self, url: str) -> FetchResponse:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.responses.get(url, self.default)


@pytest.fixture()
def cert_url() -> str:
    return CERT_URL


@pytest.fixture()
def cert_pem() -> bytes:
    return CERT_PEM


@pytest.fixture()
def fetcher() -> FakeFetcher:
    """Fetcher that serves the fixture certificate for any URL."""
    return FakeFetcher()


@pytest.fixture()
def make_fetcher():
    """Factory for fetchers with custom responses or errors."""
    return FakeFetcher


@pytest.fixture()
def failing_fetcher() -> FakeFetcher:
    return FakeFetcher(error=FetchError("error fetch: connection refused"))


@pytest.fixture()
def signed_notification() -> Notification:
    """The SNS documentation notification, with a real signature."""
    return Notification(
        type="Notification",
        message_id="22b80b92-fdea-4c2c-8f9d-bdfb0c7bf324",
        topic_arn="arn:aws:sns:us-west-2:123456789012:MyTopic",
        subject="My First Message",
        message="Hello world!",
        timestamp="2012-05-02T00:54:06.655Z",
        signature_version="1",
        signature=NOTIFICATION_SIGNATURE,
        signing_cert_url=CERT_URL,
        unsubscribe_url=(
            "https://sns.us-west-2.amazonaws.com/?Action=Unsubscribe"
            "&SubscriptionArn=arn:aws:sns:us-west-2:123456789012:MyTopic"
            ":c9135db0-26c4-47ec-8998-413945fb5a96"
        ),
    )


@pytest.fixture()
def topic01_body() -> dict:
    """Wire-format notification for topic-01, with a real signature."""
    return {
        "Type": "Notification",
        "MessageId": "2e41209f-2772-4a8d-8014-ed1fc296499d",
        "TopicArn": TOPIC01_ARN,
        "Message": "test",
        "Timestamp": "2021-12-17T02:28:11.491Z",
        "SignatureVersion": "1",
        "Signature": TOPIC01_SIGNATURE,
        "SigningCertURL": "https://sns.us-east-1.amazonaws.com/SimpleNotificationService-0000000000000000000000.pem",
    }


@pytest.fixture()
def subscription_confirmation() -> SubscriptionConfirmation:
    """The SNS documentation subscription confirmation (example signature)."""
    return SubscriptionConfirmation(
        type="SubscriptionConfirmation",
        message_id="165545c9-2a5c-472c-8df2-7ff2be2b3b1b",
        token="Ethevee8dae4mie3",
        topic_arn="arn:aws:sns:us-west-2:123456789012:MyTopic",
        message=(
            "You have chosen to subscribe to the topic arn:aws:sns:us-west-2:123456789012:MyTopic.\n"
            "To confirm the subscription, visit the SubscribeURL included in this message."
        ),
        subscribe_url=(
            "https://sns.us-west-2.amazonaws.com/?Action=ConfirmSubscription"
            "&TopicArn=arn:aws:sns:us-west-2:123456789012:MyTopic&Token=Ethevee8dae4mie3"
        ),
        timestamp="2012-04-26T20:45:04.751Z",
        signature_version="1",
        signature=EXAMPLE_SIGNATURE,
        signing_cert_url=CERT_URL,
    )


# ---------------------------------------------------------------------------
# Locally generated signing identity
# ---------------------------------------------------------------------------


def self_signed_certificate(private_key) -> bytes:
    """PEM certificate for *private_key*, valid for one day."""
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "sns.test")])
    now = datetime.now(timezone.utc)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + timedelta(days=1))
        .sign(private_key, hashes.SHA256())
    )
    return cert.public_bytes(serialization.Encoding.PEM)


@pytest.fixture(scope="session")
def make_certificate():
    """Factory building a self-signed PEM certificate for a private key."""
    return self_signed_certificate


@pytest.fixture(scope="session")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_cert_pem(rsa_key) -> bytes:
    return self_signed_certificate(rsa_key)


@pytest.fixture()
def sign_message(rsa_key):
    """Re-sign a payload with ``rsa_key`` over its canonical bytes.

    Pair with a fetcher serving ``rsa_cert_pem`` at the payload's
    ``signing_cert_url``.
    """

    def _sign(message):
        signature = rsa_key.sign(canonicalize(message), padding.PKCS1v15(), hashes.SHA1())
        return dataclasses.replace(message, signature=base64.b64encode(signature).decode())

    return _sign
