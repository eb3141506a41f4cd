"""HTTP surface of the video relay."""
