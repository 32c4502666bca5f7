"""
auth_forms.py — Sign In and Create Account forms.
Errors from the auth session are shown inline; nothing is raised past here.
"""
import streamlit as st

from quizmaster.auth import validate_sign_in, validate_sign_up
from quizmaster.context import AppContext


def render_login_form(ctx: AppContext) -> None:
    with st.form("login_form"):
        email = st.text_input("Email Address", placeholder="Enter your email")
        password = st.text_input(
            "Password", type="password", placeholder="Enter your password"
        )
        submitted = st.form_submit_button("Sign In", type="primary")

    if not submitted:
        return

    error = validate_sign_in(email, password)
    if error:
        st.error(error)
        return

    with st.spinner("Signing in..."):
        result = ctx.auth.sign_in(email.strip(), password)
    if not result.ok:
        st.error(f"**Sign In Failed**\n\n{result.error}")
        if "Invalid email or password" in result.error:
            st.caption("Don't have an account? Create one in the **Create Account** tab.")
        return
    st.rerun()


def render_signup_form(ctx: AppContext) -> None:
    with st.form("signup_form"):
        email = st.text_input("Email Address", placeholder="Enter your email", key="r_email")
        password = st.text_input("Password (min 6 chars)", type="password", key="r_pass")
        confirm = st.text_input("Confirm Password", type="password", key="r_confirm")
        submitted = st.form_submit_button("Create Account", type="primary")

    if not submitted:
        return

    error = validate_sign_up(email, password, confirm)
    if error:
        st.error(error)
        return

    with st.spinner("Creating account..."):
        result = ctx.auth.sign_up(email.strip(), password)
    if not result.ok:
        st.error(f"**Sign Up Failed**\n\n{result.error}")
        return
    if result.needs_confirmation:
        st.success(
            "Account created! Please check your email and click the "
            "confirmation link, then sign in."
        )
        return
    st.rerun()
