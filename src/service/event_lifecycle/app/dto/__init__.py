from src.service.event_lifecycle.app.dto.transition_result import TransitionResult


__all__ = ['TransitionResult']
