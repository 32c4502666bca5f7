"""Streamlit rendering for the QuizMaster screens."""
