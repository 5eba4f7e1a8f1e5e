"""MCP Prompts: pre-built interaction templates for patient monitoring."""

from __future__ import annotations

from fastmcp import FastMCP


def register_monitoring_prompts(mcp: FastMCP) -> None:
    """Register patient monitoring MCP prompts."""

    @mcp.prompt()
    def patient_monitoring_prompt(patient_id: str) -> str:
        """Prompt template for reviewing one patient's body-area network."""
        return f"""Please monitor patient {patient_id}. For the latest network reading:

1. Summarize heart rate, blood pressure, SpO2 and temperature
2. Report the alert level and any vital outside its normal range
3. Note sensors with poor signal quality or weak connections
4. Flag packet loss above 20% or a battery level below 20%

These readings are simulated; do not present them as clinical measurements."""
