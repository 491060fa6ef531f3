"""Provider clients: web search, page fetch and summarization."""
