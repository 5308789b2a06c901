"""Core — models, configuration, and provisioning services."""
