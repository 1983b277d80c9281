"""llamalink - Link Ollama models into LM Studio.

Mirrors the models known to Ollama's content-addressed store into
LM Studio's directory-per-model tree using symbolic links.
"""

__version__ = "0.3.0"
