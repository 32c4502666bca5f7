"""QuizMaster — timed multiple-choice quizzes on a Supabase backend."""

__version__ = "0.1.0"
