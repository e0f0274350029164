"""PennyPace: expense tracking backend with budget pacing."""
