"""Services used by the Sassify routers: AI integration, billing, mail and auth."""
