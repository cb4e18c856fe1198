"""Foundation: errors, result type and configuration."""
