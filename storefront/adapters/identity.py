from typing import Dict, Optional
from uuid import uuid4

import httpx

from storefront.config import settings


class IdentityProviderError(Exception):
    """Raised when the identity provider refuses or fails to create an account."""
    pass


class MockIdentityAdapter:
    """
    In-process stand-in for the hosted identity provider.
    Keeps issued accounts in memory; emails are unique.
    """

    def __init__(self):
        self.accounts: Dict[str, Dict] = {}

    def create_user(self, email: str, password: str, metadata: Optional[Dict] = None) -> Dict:
        if email in self.accounts:
            raise IdentityProviderError("A user with this email address has already been registered")
        account = {"id": str(uuid4()), "email": email, "user_metadata": metadata or {}}
        self.accounts[email] = account
        return account

    def health_check(self) -> bool:
        return True


class SupabaseIdentityAdapter:
    """
    Creates accounts through the Supabase auth admin API
    (POST {SUPABASE_URL}/auth/v1/admin/users) with the service-role key.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        service_key: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = (base_url or settings.SUPABASE_URL).rstrip("/")
        self.service_key = service_key or settings.SUPABASE_SERVICE_KEY
        if not self.base_url or not self.service_key:
            raise IdentityProviderError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be configured")
        self.client = client or httpx.Client(timeout=settings.IDENTITY_TIMEOUT_SECONDS)

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Content-Type": "application/json",
        }

    def create_user(self, email: str, password: str, metadata: Optional[Dict] = None) -> Dict:
        payload = {
            "email": email,
            "password": password,
            "email_confirm": True,
            "user_metadata": metadata or {},
        }
        try:
            r = self.client.post(f"{self.base_url}/auth/v1/admin/users", json=payload, headers=self._headers())
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            try:
                body = e.response.json()
                detail = body.get("msg") or body.get("message") or body.get("error") or str(body)
            except ValueError:
                detail = e.response.text[:200]
            raise IdentityProviderError(detail) from e
        except httpx.RequestError as e:
            raise IdentityProviderError(f"Failed to reach identity provider: {e}") from e
        return r.json()

    def health_check(self) -> bool:
        try:
            r = self.client.get(f"{self.base_url}/auth/v1/health", headers=self._headers())
            return r.status_code == 200
        except httpx.RequestError:
            return False


def build_identity_adapter():
    if settings.IDENTITY_PROVIDER == "supabase":
        return SupabaseIdentityAdapter()
    return MockIdentityAdapter()
