import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from gdriveupdate.auth import AuthInfo, OAuthClient
from gdriveupdate.errors import AuthError, InvalidArgumentError

SCOPES = ["https://www.googleapis.com/auth/drive"]


class TestOAuthClient(unittest.TestCase):
    def test_get_credentials_loads_token_file_without_refresh(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tmp_path = Path(tmp)
            token_file = tmp_path / "token.json"

            token_payload = {
                "token": "fake-token",
                "refresh_token": "fake-refresh-token",
                "token_uri": "https://oauth2.googleapis.com/token",
                "client_id": "fake-client-id",
                "client_secret": "fake-client-secret",
                "scopes": SCOPES,
                "type": "authorized_user",
            }
            token_file.write_text(json.dumps(token_payload), encoding="utf-8")

            info = AuthInfo.oauth(str(tmp_path / "client_secrets.json"), str(token_file))
            creds = OAuthClient(info).get_credentials(scopes=SCOPES, ensure_valid=False)

            self.assertEqual(creds.refresh_token, "fake-refresh-token")

    def test_service_account_file_is_loaded(self) -> None:
        info = AuthInfo.service_account("/tmp/sa.json")
        with patch(
            "google.oauth2.service_account.Credentials.from_service_account_file",
            return_value="creds",
        ) as loader:
            creds = OAuthClient(info).get_credentials(scopes=SCOPES)

        self.assertEqual(creds, "creds")
        loader.assert_called_once_with("/tmp/sa.json", scopes=SCOPES)

    def test_missing_service_account_file_raises_auth_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            info = AuthInfo.service_account(str(Path(tmp) / "missing.json"))
            with self.assertRaises(AuthError):
                OAuthClient(info).get_credentials(scopes=SCOPES)

    def test_invalid_scopes(self) -> None:
        info = AuthInfo.service_account("/tmp/sa.json")
        with self.assertRaises(InvalidArgumentError):
            OAuthClient(info).get_credentials(scopes=[])


if __name__ == "__main__":
    unittest.main()
