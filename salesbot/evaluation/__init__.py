from salesbot.evaluation.replay import ReplayError, load_questions, replay, write_log

__all__ = ["ReplayError", "load_questions", "replay", "write_log"]
