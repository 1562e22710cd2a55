"""Attachment operations for Jira API."""

import logging
import os
import tempfile
from pathlib import Path

from requests.exceptions import HTTPError, RequestException

from ..models.jira import JiraAttachment
from .client import JiraClient
from .constants import ATTACHMENT_CHUNK_SIZE, ATTACHMENT_DOWNLOAD_DIR
from .utils import sanitize_filename

logger = logging.getLogger("jira-mcp.jira.attachments")


class AttachmentsMixin(JiraClient):
    """Mixin for Jira attachment operations."""

    def get_attachment(self, attachment_id: str) -> JiraAttachment:
        """Get the metadata (filename, size, MIME type, URL) of an attachment."""
        try:
            metadata = self.jira.get_attachment(attachment_id)
        except HTTPError as http_err:
            self._raise_http_error(http_err, f"get attachment {attachment_id}")

        if not isinstance(metadata, dict):
            msg = f"Unexpected return value type from `jira.get_attachment`: {type(metadata)}"
            logger.error(msg)
            raise TypeError(msg)

        return JiraAttachment.from_api_response(metadata)

    def download_attachment(
        self, attachment_id: str, target_dir: str | None = None
    ) -> tuple[Path, JiraAttachment]:
        """
        Download an attachment to a local file.

        The file is written to ``<target_dir>/<id>_<filename>``; the target
        directory defaults to ``jira-mcp-attachments`` under the system temp
        directory and is created when missing.

        Args:
            attachment_id: The attachment id
            target_dir: Optional directory to write to

        Returns:
            The absolute path of the written file and the attachment metadata
        """
        attachment = self.get_attachment(attachment_id)
        if not attachment.url:
            raise ValueError(f"Attachment {attachment_id} has no download URL")

        directory = Path(
            target_dir or os.path.join(tempfile.gettempdir(), ATTACHMENT_DOWNLOAD_DIR)
        ).absolute()
        directory.mkdir(parents=True, exist_ok=True)
        target_path = directory / (
            f"{attachment_id}_{sanitize_filename(attachment.filename, attachment_id)}"
        )

        logger.info(f"Downloading attachment {attachment_id} to {target_path}")
        with self.jira._session.get(attachment.url, stream=True) as response:
            try:
                response.raise_for_status()
            except HTTPError as http_err:
                self._raise_http_error(http_err, f"download attachment {attachment_id}")

            try:
                with open(target_path, "wb") as f:
                    for chunk in response.iter_content(
                        chunk_size=ATTACHMENT_CHUNK_SIZE
                    ):
                        f.write(chunk)
            except (RequestException, OSError):
                logger.warning(
                    f"Download of attachment {attachment_id} failed, "
                    f"removing partial file {target_path}"
                )
                target_path.unlink(missing_ok=True)
                raise

        logger.debug(
            f"Wrote {target_path.stat().st_size} bytes for attachment {attachment_id}"
        )
        return target_path, attachment
