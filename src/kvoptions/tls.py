"""TLS settings carried by a connection configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

CERT_REQS_CHOICES = frozenset({"none", "optional", "required"})


@dataclass(frozen=True)
class TLSConfig:
    """
    TLS material and verification policy. Presence on a config enables TLS.

    Unset (``None``) values are left to the client runtime's own defaults.
    """

    ca_certs: Optional[str] = None
    ca_data: Optional[str] = None
    certfile: Optional[str] = None
    keyfile: Optional[str] = None
    cert_reqs: str = "required"
    check_hostname: Optional[bool] = None

    def to_ssl_kwargs(self) -> Dict[str, Any]:
        """Keyword arguments understood by redis-py SSL connections."""
        kwargs: Dict[str, Any] = {"ssl_cert_reqs": self.cert_reqs}
        if self.ca_certs is not None:
            kwargs["ssl_ca_certs"] = self.ca_certs
        if self.ca_data is not None:
            kwargs["ssl_ca_data"] = self.ca_data
        if self.certfile is not None:
            kwargs["ssl_certfile"] = self.certfile
        if self.keyfile is not None:
            kwargs["ssl_keyfile"] = self.keyfile
        if self.check_hostname is not None:
            kwargs["ssl_check_hostname"] = self.check_hostname
        return kwargs


__all__ = ["CERT_REQS_CHOICES", "TLSConfig"]
