from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request, send_file

from hexoed.domain.errors import HexoEditorError, InvalidNameError
from hexoed.domain.interfaces import IAssetStore, IFileService, IPostStore, ISettingsService
from hexoed.domain.models import ApiResponse, AppSettings

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")


@dataclass(frozen=True)
class ApiServices:
    settings: ISettingsService
    posts: IPostStore
    assets: IAssetStore
    files: IFileService


def _services() -> ApiServices:
    return current_app.extensions["hexoed"]


def _ok(data=None):
    return jsonify(ApiResponse.ok(data).to_dict())


def _fail(error: str, status: int):
    return jsonify(ApiResponse.fail(error).to_dict()), status


@api_bp.errorhandler(HexoEditorError)
def _handle_domain_error(e: HexoEditorError):
    logger.warning("%s %s failed: %s", request.method, request.path, e)
    return _fail(str(e), e.status_code)


# -------------------- settings --------------------


@api_bp.get("/settings")
def get_settings():
    return jsonify(_services().settings.load().to_dict())


@api_bp.post("/settings")
def save_settings():
    payload = request.get_json(silent=True) or {}
    _services().settings.save(AppSettings.from_dict(payload))
    return _ok()


@api_bp.post("/browse")
def browse():
    """Folder picker support: list sub folders of a directory."""
    payload = request.get_json(silent=True) or {}
    dir_path = Path(payload.get("path") or Path.home())
    try:
        folders = _services().files.list_dirs(dir_path)
    except OSError as e:
        return _fail(str(e), 500)

    parent = dir_path.parent
    return jsonify(
        {
            "success": True,
            "currentPath": str(dir_path),
            "parentPath": str(parent) if parent != dir_path else None,
            "folders": folders,
        }
    )


# -------------------- posts --------------------


@api_bp.get("/posts")
def list_posts():
    posts = _services().posts.list_posts()
    return _ok([{"filename": p.filename, "content": p.content} for p in posts])


@api_bp.post("/posts")
def save_post():
    payload = request.get_json(silent=True) or {}
    filename = payload.get("filename")
    content = payload.get("content")
    if not isinstance(filename, str) or not isinstance(content, str):
        raise InvalidNameError("Missing filename or content")
    post = _services().posts.save(filename, content)
    return _ok({"filename": post.filename, "content": post.content})


@api_bp.delete("/posts/<filename>")
def delete_post(filename: str):
    _services().posts.delete(filename)
    return _ok()


# -------------------- assets --------------------


@api_bp.get("/assets")
def list_assets():
    return _ok([a.to_dict() for a in _services().assets.list_assets()])


@api_bp.get("/image/<path:rel_path>")
def serve_image(rel_path: str):
    return send_file(_services().assets.image_file(rel_path))


@api_bp.post("/upload")
def upload():
    upload_file = request.files.get("file")
    if upload_file is None or not upload_file.filename:
        return _fail("No file uploaded", 400)
    folder = request.form.get("folder", "")
    asset = _services().assets.upload(folder, upload_file.filename, upload_file.read())
    return _ok(asset.to_dict())


@api_bp.post("/assets/rename")
def rename_asset():
    payload = request.get_json(silent=True) or {}
    _services().assets.rename(
        payload.get("folder") or "",
        payload.get("oldName") or "",
        payload.get("newName") or "",
    )
    return _ok()


@api_bp.delete("/assets")
def delete_asset():
    _services().assets.delete(request.args.get("folder", ""), request.args.get("name", ""))
    return _ok()
