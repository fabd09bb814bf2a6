"""
Support-program search.

- hybrid: keyword + semantic ranking over structurally filtered programs
- embeddings: generation of program embeddings
"""
