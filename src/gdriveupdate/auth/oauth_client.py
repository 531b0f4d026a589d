"""Credential loading and Drive service construction for gdriveupdate."""

from __future__ import annotations

import logging
import os
from typing import Sequence

from gdriveupdate.errors import AuthError, InvalidArgumentError

from .auth_info import AuthInfo

logger = logging.getLogger(__name__)


class OAuthClient:
    """Create credentials (OAuth or service account) and Drive API service objects."""

    def __init__(self, auth_info: AuthInfo) -> None:
        self._auth_info = auth_info

    def get_credentials(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Return credentials for the given scopes.

        Args:
            scopes: OAuth scopes.
            ensure_valid: If True, refresh OAuth credentials when possible and
                run the installed-app flow when there is no usable token.

        Raises:
            AuthError: on load/refresh/flow failures.
            InvalidArgumentError: if scopes is invalid.
        """
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise InvalidArgumentError("scopes must be a non-empty sequence of strings")

        if self._auth_info.kind == "service_account":
            return self._service_account_credentials(scopes)
        return self._oauth_credentials(scopes, ensure_valid)

    def build_drive_service(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Build a Drive v3 service resource.

        Returns:
            googleapiclient.discovery.Resource
        """
        try:
            from googleapiclient.discovery import build
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "google-api-python-client is not available",
                details={"hint": "Install google-api-python-client"},
                cause=exc,
            ) from exc

        creds = self.get_credentials(scopes=scopes, ensure_valid=ensure_valid)
        try:
            return build("drive", "v3", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc

    # ----------------------------
    # Internals
    # ----------------------------
    def _service_account_credentials(self, scopes: Sequence[str]):
        try:
            from google.oauth2 import service_account
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth"},
                cause=exc,
            ) from exc

        key_file = self._auth_info.service_account_file
        try:
            return service_account.Credentials.from_service_account_file(
                key_file,
                scopes=list(scopes),
            )
        except Exception as exc:
            raise AuthError(
                "Failed to load service account file",
                details={"service_account_file": key_file},
                cause=exc,
            ) from exc

    def _oauth_credentials(self, scopes: Sequence[str], ensure_valid: bool):
        try:
            from google.auth.transport.requests import Request
            from google.oauth2.credentials import Credentials
            from google_auth_oauthlib.flow import InstalledAppFlow
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth and google-auth-oauthlib"},
                cause=exc,
            ) from exc

        token_file = self._auth_info.token_file
        creds = None

        if os.path.exists(token_file):
            try:
                creds = Credentials.from_authorized_user_file(
                    token_file,
                    scopes=list(scopes),
                )
            except Exception as exc:
                raise AuthError(
                    "Failed to load token_file",
                    details={"token_file": token_file},
                    cause=exc,
                ) from exc

            if not ensure_valid:
                return creds

            if not creds.valid and creds.refresh_token:
                logger.debug("Refreshing OAuth token from %s", token_file)
                try:
                    creds.refresh(Request())
                    self._save_credentials(creds)
                except Exception as exc:
                    raise AuthError(
                        "Failed to refresh OAuth credentials",
                        details={"token_file": token_file},
                        cause=exc,
                    ) from exc

            if creds.valid:
                return creds

        # No token, or it could not be refreshed: run the installed-app flow.
        client_secrets = self._auth_info.client_secrets_file
        try:
            flow = InstalledAppFlow.from_client_secrets_file(
                client_secrets,
                scopes=list(scopes),
            )
            creds = flow.run_local_server(port=0)
            self._save_credentials(creds)
            return creds
        except AuthError:
            raise
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={
                    "client_secrets_file": client_secrets,
                    "token_file": token_file,
                },
                cause=exc,
            ) from exc

    def _save_credentials(self, creds) -> None:
        token_file = self._auth_info.token_file
        token_dir = os.path.dirname(token_file)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)

        try:
            with open(token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
        except OSError as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc
