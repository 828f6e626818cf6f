"""RAG Starter Kit: document Q&A over OpenAI embeddings and a Pinecone index."""

__version__ = "1.0.0"
