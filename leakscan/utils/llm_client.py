from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI

from leakscan import settings
from leakscan.schemas import ContractAnalysis, LicenseAnalysis

CONTRACT_SYSTEM_PROMPT = """You are a financial analysis expert specializing in MSP (Managed Service Provider) contract analysis. Analyze the provided contract and work logs to identify:
1. Unbilled work - services performed but not invoiced
2. SLA breaches - service level agreement violations requiring credits
3. Mispriced services - services priced below market rate

Respond with JSON in this exact format:
{
  "unbilledWork": {
    "total": number,
    "items": [{"client": string, "amount": number, "description": string, "hours": number}]
  },
  "slaBreaches": {
    "total": number,
    "violations": [{"type": string, "amount": number, "description": string}]
  },
  "mispricedServices": {
    "total": number,
    "services": [{"service": string, "currentPrice": number, "marketPrice": number, "difference": number}]
  }
}"""

LICENSE_SYSTEM_PROMPT = """You are a SaaS license optimization expert. Analyze the provided license data to identify:
1. Unused licenses - licenses with no recent activity
2. Duplicate subscriptions - multiple tools providing same functionality
3. Overprovisioned services - more licenses than active users

Respond with JSON in this exact format:
{
  "unusedLicenses": {
    "total": number,
    "licenses": [{"tool": string, "monthlyPrice": number, "lastUsed": string, "users": number}]
  },
  "duplicateSubscriptions": {
    "total": number,
    "duplicates": [{"tools": [string], "monthlyPrice": number, "functionality": string}]
  },
  "overprovisioned": {
    "total": number,
    "services": [{"service": string, "currentUsers": number, "activeUsers": number, "monthlySavings": number}]
  }
}"""

PROPOSAL_SYSTEM_PROMPT = """You are a professional proposal writer specializing in MSP financial optimization. Create a comprehensive, professional proposal based on the analysis data provided. The proposal should include:
1. Executive Summary
2. Revenue Recovery Opportunities (with specific details)
3. Cost Optimization Strategy
4. Implementation Timeline
5. Financial Impact summary
6. Next Steps

Write in a professional business tone suitable for presenting to C-level executives."""


class LLMError(RuntimeError):
    """Raised when the language-model service cannot produce a usable answer."""


def _money(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def proposal_prompt(contract: ContractAnalysis, licenses: LicenseAnalysis,
                    client_name: Optional[str] = None) -> str:
    return (
        f"Create a proposal for {client_name or 'the client'} based on this analysis:\n\n"
        "Contract Analysis:\n"
        f"- Unbilled Work: ${_money(contract.unbilled_work.total)}\n"
        f"- SLA Breaches: ${_money(contract.sla_breaches.total)}\n"
        f"- Mispriced Services: ${_money(contract.mispriced_services.total)}\n\n"
        "License Analysis:\n"
        f"- Unused Licenses: ${_money(licenses.unused_licenses.total)}/month\n"
        f"- Duplicate Subscriptions: ${_money(licenses.duplicate_subscriptions.total)}/month\n"
        f"- Overprovisioned: ${_money(licenses.overprovisioned.total)}/month\n\n"
        "Include specific details from the analysis data in the proposal."
    )


class LLMClient:
    """Thin async wrapper over OpenAI chat completions.

    The OpenAI client is built on first use so the app can start (and tests
    can run) without an API key. No retries are applied.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 client: Any = None):
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.model = model or settings.OPENAI_MODEL
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def _complete(self, messages: List[Dict[str, str]], **kwargs) -> str:
        resp = await self.client.chat.completions.create(model=self.model, messages=messages, **kwargs)
        return resp.choices[0].message.content or ""

    async def analyze_contract(self, contract_text: str, work_logs: str) -> ContractAnalysis:
        try:
            raw = await self._complete(
                [
                    {"role": "system", "content": CONTRACT_SYSTEM_PROMPT},
                    {"role": "user", "content": f"Contract: {contract_text}\n\nWork Logs: {work_logs}"},
                ],
                response_format={"type": "json_object"},
            )
            return ContractAnalysis.model_validate_json(raw or "{}")
        except Exception as exc:
            raise LLMError(f"Failed to analyze contract: {exc}") from exc

    async def analyze_licenses(self, license_data: str) -> LicenseAnalysis:
        try:
            raw = await self._complete(
                [
                    {"role": "system", "content": LICENSE_SYSTEM_PROMPT},
                    {"role": "user", "content": f"License Data: {license_data}"},
                ],
                response_format={"type": "json_object"},
            )
            return LicenseAnalysis.model_validate_json(raw or "{}")
        except Exception as exc:
            raise LLMError(f"Failed to analyze licenses: {exc}") from exc

    async def generate_proposal(self, contract: ContractAnalysis, licenses: LicenseAnalysis,
                                client_name: Optional[str] = None) -> str:
        try:
            return await self._complete(
                [
                    {"role": "system", "content": PROPOSAL_SYSTEM_PROMPT},
                    {"role": "user", "content": proposal_prompt(contract, licenses, client_name)},
                ]
            )
        except Exception as exc:
            raise LLMError(f"Failed to generate proposal: {exc}") from exc
