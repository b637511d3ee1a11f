"""Result type, configuration and logging shared by the lookup package."""
