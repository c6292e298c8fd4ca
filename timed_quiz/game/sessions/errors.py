class QuizError(Exception):
    pass


class EmptyQuestionSetError(QuizError):
    pass


class ResultsNotReadyError(QuizError):
    pass
