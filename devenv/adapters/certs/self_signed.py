"""
Self-signed certificate adapter — wildcard TLS for the base domain.

Uses ``cryptography`` to build an RSA key and an X.509 certificate
whose SAN covers every name traefik serves.
"""

from __future__ import annotations

import datetime
import logging
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.x509.oid import NameOID

from devenv.adapters.base import CertificateAdapter
from devenv.core.errors import IOFailure

logger = logging.getLogger(__name__)

VALIDITY_DAYS = 3650


class SelfSignedCertificateGenerator(CertificateAdapter):
    """Generate an unencrypted PEM key + self-signed PEM certificate."""

    def __init__(self, key_size: int = 4096, validity_days: int = VALIDITY_DAYS) -> None:
        self.key_size = key_size
        self.validity_days = validity_days

    def generate_self_signed(
        self,
        subject: str,
        sans: list[str],
        key_path: Path,
        cert_path: Path,
    ) -> None:
        logger.debug("Generating %d-bit key for CN=%s", self.key_size, subject)
        try:
            key = rsa.generate_private_key(public_exponent=65537, key_size=self.key_size)
            name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, subject)])
            now = datetime.datetime.now(datetime.UTC)
            cert = (
                x509.CertificateBuilder()
                .subject_name(name)
                .issuer_name(name)
                .public_key(key.public_key())
                .serial_number(x509.random_serial_number())
                .not_valid_before(now - datetime.timedelta(minutes=5))
                .not_valid_after(now + datetime.timedelta(days=self.validity_days))
                .add_extension(
                    x509.SubjectAlternativeName([x509.DNSName(san) for san in sans]),
                    critical=False,
                )
                .add_extension(x509.BasicConstraints(ca=False, path_length=None), critical=True)
                .sign(key, hashes.SHA256())
            )
        except ValueError as e:
            raise IOFailure(f"Failed to generate SSL certificate: {e}") from e

        key_pem = key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
        cert_pem = cert.public_bytes(serialization.Encoding.PEM)

        try:
            key_path.parent.mkdir(parents=True, exist_ok=True)
            key_path.write_bytes(key_pem)
            key_path.chmod(0o600)
            cert_path.write_bytes(cert_pem)
        except OSError as e:
            raise IOFailure(f"Failed to write SSL certificate: {e}") from e
