"""Query translation and post-processing features."""
