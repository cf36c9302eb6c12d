import time

from leakscan.schemas import InsertFile, UploadedFile
from leakscan.services.demo_data import DEMOS
from leakscan.storage import MemStorage

ALLOWED_EXTENSIONS = {
    "contract": {"pdf", "doc", "docx", "txt"},
    "worklog": {"csv", "json", "txt"},
    "license": {"csv", "xlsx", "xls", "json", "txt"},
}


class UnknownDemoType(ValueError):
    pass


def validate_file_type(filename: str, file_type: str) -> bool:
    allowed = ALLOWED_EXTENSIONS.get(file_type)
    if not allowed:
        return False
    ext = filename.lower().rsplit(".", 1)[-1]
    return ext in allowed


def process_text_file(raw: bytes) -> str:
    # pdf/doc/xlsx are not parsed; their bytes come back as replacement-heavy text
    return raw.decode("utf-8", errors="replace")


class FileIntakeService:
    def __init__(self, storage: MemStorage):
        self.storage = storage

    def save_upload(self, original_name: str, file_type: str, raw: bytes) -> UploadedFile:
        """Store the upload, then decode it and mark the record processed.

        Callers validate type and extension first. If decoding fails the
        unprocessed record stays in the store.
        """
        rec = self.storage.create_file(InsertFile(
            filename=f"{int(time.time() * 1000)}-{original_name}",
            original_name=original_name,
            type=file_type,
            size=len(raw),
        ))
        content = process_text_file(raw)
        return self.storage.update_file_content(rec.id, content, True)

    def load_demo(self, demo_type: str | None) -> UploadedFile:
        if demo_type not in DEMOS:
            raise UnknownDemoType(demo_type)
        file_type, filename, content = DEMOS[demo_type]
        return self.storage.create_file(InsertFile(
            filename=f"demo_{filename}",
            original_name=filename,
            type=file_type,
            size=len(content.encode("utf-8")),
            content=content,
            processed=True,
        ))
