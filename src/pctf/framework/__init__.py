"""Framework orchestration: provider dispatch and conformance aggregation."""

from pctf.framework.conformance import ConformanceAssessor
from pctf.framework.orchestrator import PCTFFramework, provider_directives

__all__ = ["ConformanceAssessor", "PCTFFramework", "provider_directives"]
