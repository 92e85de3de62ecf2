from cookie_mcp.server import run

run()
