"""Core modules: channel logger, instantiator and factory."""
