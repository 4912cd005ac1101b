"""Join credential discovery.

Fetches the bootstrap token and CA certificate hash a new node needs from
a plain-text HTTP endpoint (``<base_url>/token`` and
``<base_url>/token-ca-cert-hash`` by default).
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING, Union

import certifi
import requests
import urllib3
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .base import BaseProvider, ProviderError
from ..data.models import JoinCredentials

if TYPE_CHECKING:
    from ..node.config import DiscoveryConfig


class DiscoveryError(ProviderError):
    """Raised when join credentials cannot be fetched."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__("discovery", message, cause)


class DiscoveryClient(BaseProvider):
    """Fetches join credentials from the discovery endpoint."""

    def __init__(self, config: "DiscoveryConfig", session: Optional[requests.Session] = None):
        self.config = config
        self._verify = self._determine_verify(config.verify, config.ca_bundle)
        self._session = session

        if self._verify is False:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    @property
    def name(self) -> str:
        return "discovery"

    @property
    def display_name(self) -> str:
        return "Cluster discovery"

    @property
    def token_url(self) -> str:
        return self._url(self.config.token_path)

    @property
    def ca_cert_hash_url(self) -> str:
        return self._url(self.config.ca_cert_hash_path)

    def _url(self, path: str) -> str:
        return self.config.base_url.rstrip("/") + "/" + path.lstrip("/")

    def _determine_verify(self, verify: bool, ca_bundle: Optional[str]) -> Union[bool, str]:
        """Determine TLS verification setting."""
        if not verify:
            return False
        if ca_bundle:
            return ca_bundle
        return certifi.where()

    def _get_session(self) -> requests.Session:
        """Get or create a requests session with retry configuration."""
        if self._session is None:
            session = requests.Session()
            retry = Retry(
                total=self.config.retries,
                connect=self.config.retries,
                read=self.config.retries,
                backoff_factor=0.5,
                status_forcelist=(429, 500, 502, 503, 504),
                allowed_methods=("GET",),
            )
            adapter = HTTPAdapter(max_retries=retry)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
            session.verify = self._verify
            session.headers.update({"User-Agent": "kube-node/1.0"})
            self._session = session
        return self._session

    def close(self) -> None:
        """Close the session and release resources."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def _fetch(self, url: str, what: str) -> str:
        self.log(f"Getting {what} from {url}")
        try:
            resp = self._get_session().get(url, timeout=self.config.timeout)
            resp.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise DiscoveryError(f"Failed to fetch {what} from {url}: {e}", e)

        value = resp.text.strip()
        if not value:
            raise DiscoveryError(f"Empty {what} returned by {url}")
        return value

    def get_token(self) -> str:
        """Return the bootstrap token for ``kubeadm join``."""
        return self._fetch(self.token_url, "Kubernetes cluster token")

    def get_ca_cert_hash(self) -> str:
        """Return the discovery token CA cert hash (``sha256:...``)."""
        return self._fetch(self.ca_cert_hash_url, "Kubernetes cluster token CA cert hash")

    def get_credentials(self) -> JoinCredentials:
        """Fetch both values.

        Raises:
            DiscoveryError: If either value cannot be fetched.
        """
        return JoinCredentials(token=self.get_token(), ca_cert_hash=self.get_ca_cert_hash())
