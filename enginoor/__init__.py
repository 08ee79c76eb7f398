"""enginoor - minimal Ethereum Engine API client."""
