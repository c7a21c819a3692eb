"""Push-to-talk voice relay between ESP32 devices and the OpenAI Realtime API."""
