"""Command line entry point: gdrive-update FILE_ID [options]."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence, TextIO

from tqdm import tqdm

from gdriveupdate.auth import AuthInfo
from gdriveupdate.errors import GDriveUpdateError
from gdriveupdate.models import DEFAULT_CHUNK_SIZE, DEFAULT_TIMEOUT, UpdateRequest
from gdriveupdate.updater import GoogleDriveUpdater

ENV_CLIENT_SECRETS = "GDRIVEUPDATE_CLIENT_SECRETS"
ENV_TOKEN_FILE = "GDRIVEUPDATE_TOKEN_FILE"
ENV_SERVICE_ACCOUNT = "GDRIVEUPDATE_SERVICE_ACCOUNT"


class TqdmProgress:
    """Progress observer drawing a byte progress bar on stderr."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream
        self._bar: Optional[tqdm] = None

    def __call__(self, bytes_so_far: int, total: int) -> None:
        if self._bar is None:
            self._bar = tqdm(
                total=total or None,
                unit="B",
                unit_scale=True,
                unit_divisor=1024,
                dynamic_ncols=True,
                leave=False,
                file=self._stream if self._stream is not None else sys.stderr,
            )
        delta = bytes_so_far - self._bar.n
        if delta > 0:
            self._bar.update(delta)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gdrive-update",
        description="Update a Google Drive file's metadata, content and parents.",
    )
    parser.add_argument("file_id", help="ID of the Drive file to update")
    parser.add_argument("--file", dest="path", default=None, help="Local file whose content is uploaded")
    parser.add_argument("--name", default=None, help="New file name")
    parser.add_argument("--description", default=None, help="New description")
    parser.add_argument("--mime", dest="mime_type", default=None, help="Force MIME type")
    parser.add_argument(
        "--parent",
        dest="parents",
        action="append",
        default=[],
        help="Desired parent folder ID (repeat for multiple parents)",
    )
    parser.add_argument(
        "--chunksize",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help="Upload chunk size in bytes (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Upload inactivity timeout in seconds, 0 to disable (default: %(default)s)",
    )
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")

    auth = parser.add_argument_group("authentication")
    auth.add_argument(
        "--client-secrets",
        default=os.environ.get(ENV_CLIENT_SECRETS),
        help=f"OAuth client secrets JSON (env: {ENV_CLIENT_SECRETS})",
    )
    auth.add_argument(
        "--token-file",
        default=os.environ.get(ENV_TOKEN_FILE),
        help=f"OAuth token JSON (env: {ENV_TOKEN_FILE})",
    )
    auth.add_argument(
        "--service-account",
        default=os.environ.get(ENV_SERVICE_ACCOUNT),
        help=f"Service account key JSON (env: {ENV_SERVICE_ACCOUNT})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def auth_info_from_args(args: argparse.Namespace) -> AuthInfo:
    """Service account wins over OAuth when both are configured."""
    if args.service_account:
        return AuthInfo.service_account(args.service_account)
    if args.client_secrets and args.token_file:
        return AuthInfo.oauth(args.client_secrets, args.token_file)
    raise GDriveUpdateError(
        "No credentials: use --service-account, or --client-secrets with --token-file"
    )


def request_from_args(args: argparse.Namespace) -> UpdateRequest:
    return UpdateRequest(
        file_id=args.file_id,
        path=args.path,
        name=args.name,
        description=args.description,
        mime_type=args.mime_type,
        parents=args.parents,
        chunk_size=args.chunksize,
        timeout=args.timeout,
    )


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    updater: Optional[GoogleDriveUpdater] = None,
    out: Optional[TextIO] = None,
) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    progress = None if args.no_progress else TqdmProgress()
    try:
        request = request_from_args(args)
        if updater is None:
            updater = GoogleDriveUpdater(auth_info_from_args(args))
        updater.update(request, out=out, progress=progress)
    except GDriveUpdateError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        if progress is not None:
            progress.close()
    return 0
