"""Cart services: the engine facade and the view projection."""
