"""
Core domain logic: chunking, hybrid scoring, retrieval and ingestion.

Dependencies: curriculum_rag.boundary, curriculum_rag.configs
"""
