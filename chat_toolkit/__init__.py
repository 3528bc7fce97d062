"""Budget-aware conversation client for OpenAI-style completion services"""

__version__ = "0.1.0"
