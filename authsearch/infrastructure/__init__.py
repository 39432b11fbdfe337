"""Infrastructure layer: implementations of application interfaces."""
