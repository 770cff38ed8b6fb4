from split_ticket_mcp.server import main

main()
