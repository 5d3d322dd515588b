from agent.tools.gemini import GeminiTransport

__all__ = ["GeminiTransport"]
