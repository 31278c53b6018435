"""vidshare - a video-sharing platform backend."""
