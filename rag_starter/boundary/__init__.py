"""
Boundary layer.

Adapters for external collaborators: OpenAI, Pinecone, and conversation storage.
"""
