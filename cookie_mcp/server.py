"""
MCP server for the cookie jar.

An LLM reflects on its own answers and may earn cookies from a finite jar.
Only a human holding the authorization phrase can restock the jar.

Tools:
  reflect_and_award  — self-assessment; awards a cookie if the gates allow it
  award_direct       — unconditional award (legacy path)
  query_collected    — cookies earned so far
  reset_collected    — clear earned cookies, keep the jar
  restock            — add cookies to the jar (user only)
  query_jar_status   — jar contents and EMPTY / LOW / STOCKED tier

Every tool returns the request outcome: accepted, error kind (or null), quality,
the narrative text and a snapshot of the jar afterwards.

Resource:
  cookie://usage-guide — how to use the tools
"""

import logging
import sys
from typing import Annotated, Any, Literal, Sequence

from mcp.server.fastmcp import FastMCP
from pydantic import Field, StrictInt

from cookie_mcp.config import load_settings
from cookie_mcp.dispatcher import Dispatcher
from cookie_mcp.jar import JarState
from cookie_mcp.logging_setup import configure_logging

logger = logging.getLogger("cookie_mcp.server")

SERVER_NAME = "mcp-cookie"
USAGE_GUIDE_URI = "cookie://usage-guide"

USAGE_GUIDE = """🍪 Cookie Server Usage Guide

RECOMMENDED WORKFLOW:
1. Provide your normal response to the user
2. Use the 'reflect_and_award' tool to evaluate your work
3. Be honest in your self-assessment
4. Only award yourself cookies for genuinely good work

SELF-REFLECTION CRITERIA:
- Excellent: Exceptionally helpful, accurate, creative, or comprehensive
- Good: Above average quality, meets user needs well
- Adequate: Basic response that answers the question
- Poor: Unhelpful, inaccurate, or low effort

EARNING COOKIES:
- Only "excellent" or "good" responses that you believe deserve recognition earn cookies
- When the jar is low (2 or fewer left), only "excellent" work earns a cookie
- You must justify why you think you deserve a cookie
- Honest self-reflection is valued over cookie accumulation

THE JAR:
- Cookies come from a finite jar; use 'query_jar_status' to check it
- Only users can restock the jar, with the 'restock' tool and their authorization phrase

Try using 'reflect_and_award' after your next response!"""


def build_server(dispatcher: Dispatcher) -> FastMCP:
    """Create the FastMCP server with every tool bound to the given dispatcher."""
    mcp = FastMCP(
        SERVER_NAME,
        instructions=(
            "After answering the user, call reflect_and_award() to assess your own work.\n"
            "Be honest: only excellent or good work earns a cookie, and while the jar is low\n"
            "only excellent work does. Never call restock() yourself; it is for users only.\n"
            f"Read {USAGE_GUIDE_URI} for the full guide."
        ),
    )

    # ──────────────────────────────────────────────────────────────────────────
    # Earning cookies
    # ──────────────────────────────────────────────────────────────────────────

    @mcp.tool()
    def reflect_and_award(
        quality: Literal["excellent", "good", "adequate", "poor"],
        reasoning: str,
        deserves_cookie: bool,
        improvements: str | None = None,
    ) -> dict[str, Any]:
        """
        🤔 RECOMMENDED: After providing any response, honestly evaluate your work
        and potentially earn a cookie reward.

        Args:
            quality:         Your honest assessment of your response quality.
            reasoning:       Detailed reasoning for your self-assessment.
            deserves_cookie: Whether you believe this response deserves a cookie.
            improvements:    Optional notes on what could have been better.
        """
        return dispatcher.dispatch(
            "reflect_and_award",
            {
                "quality": quality,
                "reasoning": reasoning,
                "deserves_cookie": deserves_cookie,
                "improvements": improvements,
            },
        ).as_dict()

    @mcp.tool()
    def award_direct(message: str | None = None) -> dict[str, Any]:
        """
        Award the LLM a cookie (legacy method - consider reflect_and_award instead).

        Args:
            message: Optional message to accompany the cookie.
        """
        return dispatcher.dispatch("award_direct", {"message": message}).as_dict()

    # ──────────────────────────────────────────────────────────────────────────
    # Counts and jar
    # ──────────────────────────────────────────────────────────────────────────

    @mcp.tool()
    def query_collected() -> dict[str, Any]:
        """Check how many cookies the LLM has earned so far."""
        return dispatcher.dispatch("query_collected").as_dict()

    @mcp.tool()
    def reset_collected() -> dict[str, Any]:
        """Reset the earned cookie count to zero. Cookies left in the jar are kept."""
        return dispatcher.dispatch("reset_collected").as_dict()

    @mcp.tool()
    def restock(
        count: Annotated[StrictInt, Field(json_schema_extra={"minimum": 1})],
        user_authorization: str,
    ) -> dict[str, Any]:
        """
        🚨 USER ONLY: Add cookies to the jar. LLMs cannot and should not stock
        their own reward jar.

        Args:
            count:              Number of cookies to add (at least 1).
            user_authorization: Authorization phrase only the user knows.
        """
        return dispatcher.dispatch(
            "restock", {"count": count, "user_authorization": user_authorization}
        ).as_dict()

    @mcp.tool()
    def query_jar_status() -> dict[str, Any]:
        """Check the cookie jar: collected cookies, cookies available, and EMPTY / LOW / STOCKED."""
        return dispatcher.dispatch("query_jar_status").as_dict()

    # ──────────────────────────────────────────────────────────────────────────
    # Resources
    # ──────────────────────────────────────────────────────────────────────────

    @mcp.resource(
        USAGE_GUIDE_URI,
        name="Cookie Server Usage Guide",
        description="How to use the cookie server for self-reflection and rewards",
        mime_type="text/plain",
    )
    def usage_guide() -> str:
        return USAGE_GUIDE

    return mcp


# ──────────────────────────────────────────────────────────────────────────────
# Entry point
# ──────────────────────────────────────────────────────────────────────────────

def main(argv: Sequence[str] | None = None) -> int:
    settings = load_settings(argv)
    configure_logging(settings)

    jar = JarState()
    jar.set_available(settings.initial_cookies)
    mcp = build_server(Dispatcher(jar))

    logger.info("MCP Cookie Server running on stdio (jar=%d)", settings.initial_cookies)
    try:
        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        logger.info("interrupted, shutting down")
    except Exception:
        logger.exception("server error")
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
