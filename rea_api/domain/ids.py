from __future__ import annotations

import hashlib
import importlib
import secrets

ulid_module = importlib.import_module("ulid")


def new_submission_id() -> str:
    return f"rea_{ulid_module.new().str}"


def new_etag() -> str:
    seed = f"{ulid_module.new().str}:{secrets.token_hex(8)}"
    return hashlib.sha1(seed.encode("utf-8")).hexdigest()
