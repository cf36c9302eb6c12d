from decimal import Decimal
from typing import Dict, Optional

from leakscan.schemas import ContractAnalysis, InsertProposal, LicenseAnalysis, Proposal
from leakscan.services.buckets import BUCKETS, CONTRACT_BUCKETS, LICENSE_BUCKETS, decimal_str
from leakscan.storage import MemStorage

PROPOSAL_TITLE = "Financial Optimization Proposal"


class ProposalService:
    def __init__(self, storage: MemStorage, llm):
        self.storage = storage
        self.llm = llm

    def summaries(self):
        """Rebuild both analyzer summaries from stored results, keyed on the bucket tag.

        Later results for the same bucket replace earlier ones. Returns the two
        summaries plus the Decimal amount per bucket kind.
        """
        contract = ContractAnalysis(**{b.field: b.model() for b in CONTRACT_BUCKETS})
        licenses = LicenseAnalysis(**{b.field: b.model() for b in LICENSE_BUCKETS})
        amounts: Dict[str, Decimal] = {}

        for summary, result_type in ((contract, "revenue_leak"), (licenses, "cost_waste")):
            for r in self.storage.get_analysis_results_by_type(result_type):
                b = BUCKETS[r.bucket]
                if b.result_type != result_type:
                    continue
                amount = Decimal(r.amount)
                details = r.details or {}
                rebuilt = b.model.model_validate({
                    "total": float(amount),
                    b.items_field: details.get(b.items_field) or [],
                })
                setattr(summary, b.field, rebuilt)
                amounts[b.kind] = amount
        return contract, licenses, amounts

    async def generate(self, client_name: Optional[str] = None) -> Proposal:
        contract, licenses, amounts = self.summaries()
        content = await self.llm.generate_proposal(contract, licenses, client_name)

        one_time = sum((amounts.get(b.kind, Decimal(0)) for b in CONTRACT_BUCKETS), Decimal(0))
        monthly = sum((amounts.get(b.kind, Decimal(0)) for b in LICENSE_BUCKETS), Decimal(0))
        annual = monthly * 12

        title = f"{PROPOSAL_TITLE} - {client_name}" if client_name else PROPOSAL_TITLE
        return self.storage.create_proposal(InsertProposal(
            title=title,
            content=content,
            total_impact=decimal_str(one_time + annual),
            one_time_recovery=decimal_str(one_time),
            annual_savings=decimal_str(annual),
        ))
