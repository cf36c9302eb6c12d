import uuid
from typing import List

from leakscan.schemas import AnalysisResult, InsertAnalysisResult
from leakscan.services.buckets import CONTRACT_BUCKETS, LICENSE_BUCKETS, decimal_str
from leakscan.storage import MemStorage
from leakscan.utils.logs import log


class AnalysisService:
    def __init__(self, storage: MemStorage, llm):
        self.storage = storage
        self.llm = llm

    def combined_text(self, file_type: str) -> str:
        return "\n\n".join(f.content or "" for f in self.storage.get_files_by_type(file_type))

    def _record(self, run_id: str, analysis, buckets) -> List[AnalysisResult]:
        out = []
        for b in buckets:
            summary = getattr(analysis, b.field)
            if summary.total <= 0:
                continue
            items = getattr(summary, b.items_field)
            out.append(self.storage.create_analysis_result(InsertAnalysisResult(
                run_id=run_id,
                bucket=b.kind,
                type=b.result_type,
                title=b.title,
                amount=decimal_str(summary.total),
                description=b.describe(len(items)),
                details=summary.model_dump(by_alias=True),
                severity=b.severity,
            )))
        return out

    async def run(self) -> List[AnalysisResult]:
        """Analyze every stored file and persist one result per non-empty bucket.

        Results from earlier runs are kept. Results written before a failing
        analyzer call stay in the store; the error propagates to the caller.
        """
        run_id = str(uuid.uuid4())
        contract_text = self.combined_text("contract")
        worklog_text = self.combined_text("worklog")
        license_text = self.combined_text("license")
        log("analysis", run_id, "text lengths:",
            f"contract={len(contract_text)} worklog={len(worklog_text)} license={len(license_text)}")

        results: List[AnalysisResult] = []
        if contract_text and worklog_text:
            contract = await self.llm.analyze_contract(contract_text, worklog_text)
            results += self._record(run_id, contract, CONTRACT_BUCKETS)

        if license_text:
            licenses = await self.llm.analyze_licenses(license_text)
            results += self._record(run_id, licenses, LICENSE_BUCKETS)

        log("analysis", run_id, "completed with", len(results), "results")
        return results
