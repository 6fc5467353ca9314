"""Meeting-record extraction from chat-rendered meeting summaries."""
