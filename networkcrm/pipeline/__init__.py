"""
Analysis Pipeline

Contact ingestion, the analysis pass and report generation.
"""

from networkcrm.pipeline.ingest import load_contacts, contacts_from_records
from networkcrm.pipeline.analyze import NetworkAnalyzer, NetworkingReport, analyze_network
from networkcrm.pipeline.outputs import OutputGenerator, generate_outputs

__all__ = [
    "load_contacts",
    "contacts_from_records",
    "NetworkAnalyzer",
    "NetworkingReport",
    "analyze_network",
    "OutputGenerator",
    "generate_outputs",
]
