"""Movie and TV identification, video discovery, ffprobe parsing, configuration and secrets for a media library scanner."""

__version__ = "0.1.0"