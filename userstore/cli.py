#!/usr/bin/env python3
"""
Manage user records stored in a JSON file.

Usage:
  userstore -operation list [-fileName users.json]
  userstore -operation add -item '{"id":"1","email":"a@x.com","age":30}'
  userstore -operation remove -id 1
  userstore -operation findById -id 1
  userstore -operation remove -id=-x   (values starting with "-" need the = form)
"""
from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, Optional, Sequence

from userstore.core.config import Settings, get_settings
from userstore.core.errors import UserStoreError
from userstore.core.log import configure_logging
from userstore.services.user_service import OPERATIONS, OperationParams, UserService


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="userstore", description="Manage user records stored in a JSON file")
    ap.add_argument("-operation", "--operation", dest="operation", default="", help=", ".join(OPERATIONS))
    ap.add_argument("-item", "--item", dest="item", default="", help="should be json string")
    ap.add_argument("-id", "--id", dest="user_id", default="", help="User id")
    ap.add_argument(
        "-fileName",
        "--file-name",
        dest="file_name",
        default=settings.users_file,
        help=f"File name (default: {settings.users_file})",
    )
    return ap


def main(argv: Optional[Sequence[str]] = None, out: Optional[BinaryIO] = None) -> int:
    settings = get_settings()
    configure_logging(settings.log_level)
    args = build_parser(settings).parse_args(argv)
    params = OperationParams(
        operation=args.operation,
        file_name=args.file_name,
        item=args.item,
        user_id=args.user_id,
    )
    sink = out if out is not None else sys.stdout.buffer
    try:
        UserService(settings).perform(params, sink)
    except UserStoreError as exc:
        sys.stderr.write(f"Error: {exc}\n")
        return 1
    return 0


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
