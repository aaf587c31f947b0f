"""
Namecheap FTP Connector
Handles product image and video uploads to the Namecheap hosting account

Files are stored as /{folder}/{timestamp}-{random}.{ext} and served from
{NAMECHEAP_FTP_BASE_URL}/{folder}/{timestamp}-{random}.{ext}

Author: JRadiance
Date: 2026-02-09
"""
import ftplib
import io
import logging
import random
import string
import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlparse

from storefront.core.config import settings
from storefront.domain.upload import UploadResult

logger = logging.getLogger(__name__)

MISSING_CONFIG_ERROR = "FTP configuration is missing. Please check environment variables."

_BASE36 = string.digits + string.ascii_lowercase


@dataclass
class FTPConfig:
    """FTP connection configuration"""
    host: str
    port: int
    user: str
    password: str
    base_url: str

    @classmethod
    def from_settings(cls) -> Optional["FTPConfig"]:
        """Read config from settings, None when any required value is missing"""
        if not all([
            settings.NAMECHEAP_FTP_HOST,
            settings.NAMECHEAP_FTP_USER,
            settings.NAMECHEAP_FTP_PASSWORD,
            settings.NAMECHEAP_FTP_BASE_URL,
        ]):
            logger.warning("FTP configuration is incomplete. Please check environment variables.")
            return None

        return cls(
            host=settings.NAMECHEAP_FTP_HOST,
            port=settings.NAMECHEAP_FTP_PORT or 21,
            user=settings.NAMECHEAP_FTP_USER,
            password=settings.NAMECHEAP_FTP_PASSWORD,
            base_url=settings.NAMECHEAP_FTP_BASE_URL.rstrip("/"),
        )


def generate_filename(original_name: str) -> str:
    """
    Unique remote filename: {epoch millis}-{6 base36 chars}.{ext}

    The extension is whatever follows the last dot of the original name,
    or "file" when that is empty.
    """
    timestamp = int(time.time() * 1000)
    random_part = "".join(random.choice(_BASE36) for _ in range(6))
    extension = original_name.rsplit(".", 1)[-1] or "file"
    return f"{timestamp}-{random_part}.{extension}"


def extract_filename_from_url(url: str) -> str:
    """Last path segment of a public file URL"""
    parsed = urlparse(url)
    if parsed.scheme and parsed.netloc:
        return parsed.path[parsed.path.rfind("/") + 1:]
    return url[url.rfind("/") + 1:]


def extract_folder_from_url(url: str, base_url: Optional[str] = None) -> Optional[str]:
    """
    Folder part of a public file URL, e.g. "products/videos" for
    {base_url}/products/videos/1-x.mp4. None when the URL has no folder.
    """
    if base_url and url.startswith(base_url + "/"):
        path = url[len(base_url):]
    else:
        parsed = urlparse(url)
        path = parsed.path if parsed.scheme and parsed.netloc else url

    folder = path[:path.rfind("/") + 1].strip("/")
    return folder or None


class FTPConnector:
    """
    Connector for the media FTP server

    Handles:
    - Single and multiple file uploads
    - Remote directory creation
    - File deletion

    One connection is opened per call and always closed afterwards.
    """

    def __init__(self, config: Optional[FTPConfig] = None):
        self.config = config or FTPConfig.from_settings()

    def _login(self, client: ftplib.FTP) -> None:
        client.connect(self.config.host, self.config.port)
        client.login(self.config.user, self.config.password)

    def ensure_directory_exists(self, client: ftplib.FTP, directory: str) -> None:
        """
        Make sure directory exists on the server (FTP does not auto-create).

        Tries the full path first, then walks /a, /a/b, ... creating each
        missing segment. Creation failures are logged and the upload is
        still attempted.
        """
        try:
            client.cwd(directory)
            return
        except ftplib.all_errors:
            pass

        try:
            current_path = ""
            for part in [p for p in directory.split("/") if p]:
                current_path += "/" + part
                try:
                    client.cwd(current_path)
                except ftplib.error_perm:
                    client.mkd(current_path)
        except ftplib.all_errors as e:
            logger.warning(f"Failed to create directory {directory}: {e}")

    def upload_file(self, content: bytes, original_name: str, folder: Optional[str] = None) -> UploadResult:
        """
        Upload a single file

        Args:
            content: Raw file bytes
            original_name: Client-side filename, used only for the extension
            folder: Destination folder (e.g. "products", "products/videos")

        Returns:
            UploadResult with the public URL or the error
        """
        folder = folder or settings.UPLOAD_DEFAULT_FOLDER
        if self.config is None:
            return UploadResult(success=False, error=MISSING_CONFIG_ERROR)

        client = None
        try:
            filename = generate_filename(original_name)
            remote_path = f"/{folder}/{filename}"

            client = ftplib.FTP()
            self._login(client)
            self.ensure_directory_exists(client, folder)
            client.storbinary(f"STOR {remote_path}", io.BytesIO(content))

            url = f"{self.config.base_url}/{folder}/{filename}"
            logger.info(f"Uploaded {original_name} to {url}")
            return UploadResult(success=True, url=url, filename=filename)

        except Exception as e:
            logger.error(f"FTP upload error: {e}")
            return UploadResult(success=False, error=str(e) or "Failed to upload file")
        finally:
            if client is not None:
                client.close()

    def upload_files(self, files: Iterable[Tuple[str, bytes]], folder: Optional[str] = None) -> List[UploadResult]:
        """Upload (name, content) pairs one after another, one result each"""
        return [self.upload_file(content, name, folder) for name, content in files]

    def delete_file(self, filename: str, folder: Optional[str] = None) -> UploadResult:
        """Delete /{folder}/{filename} from the server"""
        folder = folder or settings.UPLOAD_DEFAULT_FOLDER
        if self.config is None:
            return UploadResult(success=False, error="FTP configuration is missing.")

        client = None
        try:
            client = ftplib.FTP()
            self._login(client)
            client.delete(f"/{folder}/{filename}")
            logger.info(f"Deleted /{folder}/{filename}")
            return UploadResult(success=True, filename=filename)
        except Exception as e:
            logger.error(f"FTP delete error: {e}")
            return UploadResult(success=False, error=str(e) or "Failed to delete file")
        finally:
            if client is not None:
                client.close()

    def delete_url(self, url: str, folder: Optional[str] = None) -> UploadResult:
        """Delete the file behind a public URL, taking the folder from the URL unless given"""
        base_url = self.config.base_url if self.config else None
        return self.delete_file(
            extract_filename_from_url(url),
            folder or extract_folder_from_url(url, base_url),
        )
