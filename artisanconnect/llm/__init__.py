"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Send chat-completion requests and return the reply text.
"""
