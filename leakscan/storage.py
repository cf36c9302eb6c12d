import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from leakscan.schemas import (
    AnalysisResult,
    InsertAnalysisResult,
    InsertFile,
    InsertProposal,
    InsertUser,
    Proposal,
    UploadedFile,
    User,
)


class RecordNotFound(KeyError):
    """Raised when an update targets a record id the store does not hold."""


class UsernameTaken(ValueError):
    pass


def _now() -> datetime:
    return datetime.now(timezone.utc)


class MemStorage:
    """Process-lifetime repository for users, files, analysis results and proposals.

    One instance is built per app and shared by every request. Collections are
    plain dicts keyed by uuid, so iteration follows insertion order. Nothing
    here locks: the store is only touched from the event loop thread.
    """

    def __init__(self, clock=_now):
        self._clock = clock
        self.users: Dict[str, User] = {}
        self.files: Dict[str, UploadedFile] = {}
        self.analysis_results: Dict[str, AnalysisResult] = {}
        self.proposals: Dict[str, Proposal] = {}

    @staticmethod
    def _new_id() -> str:
        return str(uuid.uuid4())

    # --- users ---

    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def create_user(self, data: InsertUser) -> User:
        if self.get_user_by_username(data.username) is not None:
            raise UsernameTaken(data.username)
        user = User(id=self._new_id(), **data.model_dump())
        self.users[user.id] = user
        return user

    # --- files ---

    def create_file(self, data: InsertFile) -> UploadedFile:
        rec = UploadedFile(id=self._new_id(), uploaded_at=self._clock(), **data.model_dump())
        self.files[rec.id] = rec
        return rec

    def get_file(self, file_id: str) -> Optional[UploadedFile]:
        return self.files.get(file_id)

    def get_files(self) -> List[UploadedFile]:
        return list(self.files.values())

    def get_files_by_type(self, file_type: str) -> List[UploadedFile]:
        return [f for f in self.files.values() if f.type == file_type]

    def update_file_content(self, file_id: str, content: str, processed: bool) -> UploadedFile:
        cur = self.files.get(file_id)
        if cur is None:
            raise RecordNotFound(file_id)
        updated = cur.model_copy(update={"content": content, "processed": processed})
        self.files[file_id] = updated
        return updated

    # --- analysis results ---

    def create_analysis_result(self, data: InsertAnalysisResult) -> AnalysisResult:
        rec = AnalysisResult(id=self._new_id(), created_at=self._clock(), **data.model_dump())
        self.analysis_results[rec.id] = rec
        return rec

    def get_analysis_results(self) -> List[AnalysisResult]:
        return list(self.analysis_results.values())

    def get_analysis_results_by_type(self, result_type: str) -> List[AnalysisResult]:
        return [r for r in self.analysis_results.values() if r.type == result_type]

    # --- proposals ---

    def create_proposal(self, data: InsertProposal) -> Proposal:
        rec = Proposal(id=self._new_id(), created_at=self._clock(), **data.model_dump())
        self.proposals[rec.id] = rec
        return rec

    def get_proposals(self) -> List[Proposal]:
        return list(self.proposals.values())

    def get_latest_proposal(self) -> Optional[Proposal]:
        latest = None
        for p in self.proposals.values():
            # ties go to the later insert
            if latest is None or p.created_at >= latest.created_at:
                latest = p
        return latest
