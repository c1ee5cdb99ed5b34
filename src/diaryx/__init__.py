"""
Diaryx Backend - note sync and sharing

Syncs markdown notes across devices with last-writer-wins conflict
resolution, and shares notes with other users through visibility terms
declared in each note's frontmatter.

Version: 1.0.0
"""

__version__ = "1.0.0"
