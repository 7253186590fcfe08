"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Ask the model for neighborhood vibe scores and "day in the life" stories.
- Extract the JSON payload from the model's reply.
- Return an empty payload when the LLM is unavailable or returns invalid output.
"""
