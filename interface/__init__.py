"""Driver front-ends for the engine: terminal game loop and board printer."""
