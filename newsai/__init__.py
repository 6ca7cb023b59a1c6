"""
NewsAI Backend

A FastAPI backend for the NewsAI bilingual news reader.
Provides news ingestion, AI summarization and categorization, and article management.
"""

__version__ = "1.0.0"
