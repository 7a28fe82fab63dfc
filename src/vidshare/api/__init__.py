"""HTTP procedure layer for vidshare."""
