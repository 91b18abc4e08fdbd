"""Runtime services (logging, profiling) shared by the engine."""
