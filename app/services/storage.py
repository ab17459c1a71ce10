import logging
import os
import uuid
from werkzeug.utils import secure_filename
from app.exceptions import UploadError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {"pdf", "png", "jpg", "jpeg", "webp"}


class LocalUploader:
    """Object storage backed by a local directory.

    ``upload(file, category)`` stores a werkzeug ``FileStorage`` under
    ``<root>/<category>/`` and returns its public URL.
    """

    def __init__(self, root: str, base_url: str):
        self.root = root
        self.base_url = base_url.rstrip("/")

    def upload(self, file, category: str) -> str:
        filename = secure_filename(file.filename or "")
        if not filename or "." not in filename:
            raise UploadError("file name is missing an extension")
        ext = filename.rsplit(".", 1)[-1].lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise UploadError("only images or PDF files are allowed")

        stored_name = f"{uuid.uuid4().hex}_{filename}"
        target_dir = os.path.join(self.root, category)
        try:
            os.makedirs(target_dir, exist_ok=True)
            file.save(os.path.join(target_dir, stored_name))
        except OSError as e:
            logger.error("Upload to %s failed: %s", target_dir, e, exc_info=True)
            raise UploadError(str(e.strerror or e)) from e
        logger.info("Stored %s/%s", category, stored_name)
        return f"{self.base_url}/{category}/{stored_name}"


def init_storage(app):
    app.uploader = LocalUploader(
        app.config["UPLOAD_FOLDER"],
        app.config.get("UPLOAD_BASE_URL", "/uploads"),
    )
