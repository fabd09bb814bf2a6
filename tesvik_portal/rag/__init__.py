"""
Retrieval-augmented chat over the official Q&A documents.

- chunking: sentence-greedy chunking of uploaded documents
- knowledge_base: ingestion, listing and similarity retrieval of chunks
- prompts: system and user prompts for the answer model
- postprocess: badge appending and follow-up question extraction
- pipeline: the end-to-end ``RagChatService``
"""
