"""Commands for neo-storage."""

from .upload_file import UploadFileCommand
from .delete_file import DeleteFileCommand

__all__ = ["UploadFileCommand", "DeleteFileCommand"]
