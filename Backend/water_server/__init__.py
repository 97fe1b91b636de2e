"""Water Wars: daily hydration contest backend."""
