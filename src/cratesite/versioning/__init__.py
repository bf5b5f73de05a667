"""Version records and the version page resolver."""
