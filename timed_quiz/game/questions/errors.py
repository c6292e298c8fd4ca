from timed_quiz.game.sessions.errors import QuizError


class QuestionSourceError(QuizError):
    pass


class SourceUnavailableError(QuizError):
    pass
