from .content_cache import ContentCache, read_text_file
from .output_dir import OutputDirectory, is_unsafe_dist
from .walker import EntryWalker

__all__ = ['ContentCache', 'read_text_file', 'OutputDirectory', 'is_unsafe_dist', 'EntryWalker']
