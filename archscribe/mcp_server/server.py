"""
archscribe MCP Server.

Transport: stdio only (launched by the agent host).

Expected MCP Tool Return Format:
{
    "ok": bool,
    "results": Any,          # Present if ok is True
    "error": str            # Present if ok is False
}
"""

import argparse
import logging
import os
import signal
from typing import Any, Annotated, Dict, List, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from mcp.types import ToolAnnotations
from pydantic import Field

from ..common.config import load_config
from ..common.logging_utils import configure_logging
from ..common.schemas import ChangeAnalysisError, Recommendation, parse_change_analysis
from ..classifier import (
    ChangeScorer,
    NarrativeSynthesizer,
    is_architecturally_significant,
    is_likely_architectural,
    matching_categories,
)

logger = logging.getLogger("archscribe.mcp")

ANALYSIS_DESCRIPTION = (
    "Change facts: affectedFiles (list of paths), affectedConcepts (list), "
    "scope ('file' | 'module' | 'project'), patternChanges (list), "
    "dependentsCount (int >= 0), breakingChanges (bool), configurationChanges (bool)."
)


class MCPServerApp:
    """
    Main application class for the MCP server.

    Exposes the classifier as read-only tools. The server keeps no state
    between calls beyond the configured scorer and synthesizer.
    """
    def __init__(
            self,
            mcp_server_name: str = "archscribe",
            scorer: Optional[ChangeScorer] = None,
            synthesizer: Optional[NarrativeSynthesizer] = None,
        ) -> None:
        """
        Initializes the MCPServerApp.
        Args:
            mcp_server_name (str): The name of the MCP server.
            scorer (ChangeScorer): Scorer to use; defaults to standard thresholds.
            synthesizer (NarrativeSynthesizer): Narrative builder for recorded decisions.
        """
        self.scorer = scorer or ChangeScorer()
        self.synthesizer = synthesizer or NarrativeSynthesizer()
        # mcp
        self.mcp = FastMCP(name=mcp_server_name)

        # ---------- MCP Tools: Assess Change ---------- #
        @self.mcp.tool(
            name="assess_change",
            description=(
                "Decide whether a code change is an architectural decision worth recording. "
                "Returns confidence, reasons and a recommendation (record, skip, use_project_decision). "
                "When the recommendation is 'record', a suggested decision context is included."
            ),
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_assess_change(
            analysis: Annotated[Dict[str, Any], Field(description=ANALYSIS_DESCRIPTION)],
        ) -> Dict[str, Any]:
            """
            MCP tool to score a change and, for recorded decisions, draft its context.

            Args:
                analysis (Dict[str, Any]): Complete change facts.

            Returns:
                Dict[str, Any]: Scoring result, plus decision_context when recording.
            """
            try:
                change = parse_change_analysis(analysis)
            except ChangeAnalysisError as exc:
                return {"ok": False, "error": str(exc)}

            criteria = self.scorer.score(change)
            results = criteria.to_dict()
            results["explanation"] = self.scorer.explain(criteria)
            if criteria.recommendation is Recommendation.RECORD:
                results["decision_context"] = self.synthesizer.explain(change).to_dict()

            logger.info(
                "assess_change: %s (confidence %.2f)",
                criteria.recommendation.value, criteria.confidence,
            )
            return {"ok": True, "results": results}

        # ---------- MCP Tools: Quick Check ---------- #
        @self.mcp.tool(
            name="quick_check",
            description=(
                "Cheap check on possibly incomplete change facts. "
                "True when any single architectural criterion holds. Omit fields that are not known yet."
            ),
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_quick_check(
            analysis: Annotated[Dict[str, Any], Field(description=ANALYSIS_DESCRIPTION + " All fields optional.")],
        ) -> Dict[str, Any]:
            """
            MCP tool for the unweighted fast-path classification.

            Args:
                analysis (Dict[str, Any]): Partial change facts.

            Returns:
                Dict[str, Any]: {"likely_architectural": bool}
            """
            try:
                likely = is_likely_architectural(analysis)
            except ChangeAnalysisError as exc:
                return {"ok": False, "error": str(exc)}
            return {"ok": True, "results": {"likely_architectural": likely}}

        # ---------- MCP Tools: Check Files ---------- #
        @self.mcp.tool(
            name="check_files",
            description="Check which file paths are architecturally significant (manifests, entry points, architecture docs, core directories).",
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_check_files(
            file_paths: Annotated[List[str], Field(description="file paths using forward slashes")],
        ) -> Dict[str, Any]:
            """
            MCP tool to run the path significance check on each path.

            Args:
                file_paths (List[str]): Paths to check.

            Returns:
                Dict[str, Any]: One entry per path with significance and matched categories.
            """
            if not file_paths:
                return {"ok": False, "error": "file_paths must contain at least one path."}

            results = [
                {
                    "path": path,
                    "significant": is_architecturally_significant(path),
                    "categories": matching_categories(path),
                }
                for path in file_paths
            ]
            return {"ok": True, "results": results}

        # ---------- MCP Tools: Explain Change ---------- #
        @self.mcp.tool(
            name="explain_change",
            description="Draft the decision context and rationale for recording a change as an architecture decision.",
            annotations=ToolAnnotations(readOnlyHint=True, destructiveHint=False)
        )
        async def tool_explain_change(
            analysis: Annotated[Dict[str, Any], Field(description=ANALYSIS_DESCRIPTION)],
        ) -> Dict[str, Any]:
            """
            MCP tool to synthesize decision context without scoring.

            Args:
                analysis (Dict[str, Any]): Complete change facts.

            Returns:
                Dict[str, Any]: decision_context, suggested_rationale, suggested_alternatives.
            """
            try:
                change = parse_change_analysis(analysis)
            except ChangeAnalysisError as exc:
                return {"ok": False, "error": str(exc)}
            return {"ok": True, "results": self.synthesizer.explain(change).to_dict()}

    def run(self) -> None:
        """Runs the MCP server using stdio transport."""
        self.mcp.run(transport="stdio")


def main() -> None:
    load_dotenv()

    parser = argparse.ArgumentParser(description="archscribe MCP server")
    parser.add_argument(
        "--server-name",
        default=None,
        help="MCP server name (defaults to config / ARCHSCRIBE_SERVER_NAME).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Log level (defaults to config / ARCHSCRIBE_LOG_LEVEL).",
    )
    args = parser.parse_args()

    # stdout carries JSON-RPC from here on
    os.environ.setdefault("MCP_SERVER", "true")

    config = load_config()
    configure_logging(
        level=args.log_level or config.logging.level,
        stream_preference=config.logging.stream,
        debug=config.logging.debug,
    )

    scorer = ChangeScorer(
        record_threshold=config.classifier.record_threshold,
        project_decision_threshold=config.classifier.project_decision_threshold,
    )
    app = MCPServerApp(
        mcp_server_name=args.server_name or config.server.name,
        scorer=scorer,
    )
    logger.info(
        "Starting %s (record >= %.2f, project decision >= %.2f)",
        args.server_name or config.server.name,
        scorer.record_threshold,
        scorer.project_decision_threshold,
    )

    def _handle_shutdown(signum, frame):
        raise SystemExit(0)
    for sig in (signal.SIGINT, getattr(signal, "SIGTERM", None)):
        if sig is not None:
            signal.signal(sig, _handle_shutdown)

    app.run()


if __name__ == "__main__":
    main()
