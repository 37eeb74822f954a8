"""
Outreach agent engine.

Runs short-lived agent tasks (lead discovery, research, outreach drafting,
issue scouting, donor asks) against pluggable LLM, scraping and CRM providers,
recording each execution as an AgentRun.
"""

__version__ = '1.0.0'
