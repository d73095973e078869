# app.py
# Streamlit page for the Half-Byte Lisp interpreter: code, code format and
# arguments in, result out, plus a "Permalink" button that builds a URL
# containing the whole editor state (?f=<format>&p=<code>&a=<args>).
# The button copies that URL to the clipboard and then goes to it, whether
# or not the copy worked, so the address bar always holds a reloadable link.
#
# - Ctrl+Enter anywhere on the page runs the code
# - The interpreter itself is external: HBL_INTERPRETER="package.module:run"
#
# Usage:
#   pip install -e .
#   HBL_INTERPRETER=hbl.interpreter:run_hbl streamlit run app.py

import asyncio
import logging

import streamlit as st
from streamlit.components.v1 import html

from browser import (ARGS_WIDGET, CODE_WIDGET, FORMAT_WIDGET, RESULT_WIDGET, RUN_LABEL,
                     BrowserBridge, StreamlitView, current_pairs, shortcut_script)
from config import load_settings
from interpreter import InterpreterNotFound, load_interpreter, unavailable_interpreter
from permalink import PermalinkService
from session import SessionController

settings = load_settings()
logging.basicConfig(level=settings.LOG_LEVEL,
                    format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("app")

st.set_page_config(page_title=settings.PAGE_TITLE, layout="wide")

if settings.INTERPRETER:
    try:
        run_hbl = load_interpreter(settings.INTERPRETER)
    except InterpreterNotFound as e:
        logger.error("Cannot load interpreter: %s", e)
        run_hbl = unavailable_interpreter(str(e))
else:
    run_hbl = unavailable_interpreter("HBL_INTERPRETER is not set")

view = StreamlitView(settings.CODE_FORMATS)
controller = SessionController(view, settings.CODE_FORMATS, run_hbl, debug=settings.DEBUG)
bridge = BrowserBridge()
permalinks = PermalinkService(controller, settings.PUBLIC_URL, bridge, bridge)

# Loading: widgets can only be filled before they are drawn, once per page load
if not st.session_state.get("_loaded"):
    controller.load_pairs(current_pairs(st.query_params))
    st.session_state["_loaded"] = True


def copy_permalink():
    asyncio.run(permalinks.share())


st.title(settings.PAGE_TITLE)

st.selectbox("Code format", settings.CODE_FORMATS, key=FORMAT_WIDGET)
st.text_area("Code", key=CODE_WIDGET, height=200)
st.text_area("Arguments (one per line)", key=ARGS_WIDGET, height=100)

run_col, share_col = st.columns([1, 1])
with run_col:
    st.button(RUN_LABEL, on_click=controller.run, type="primary")
with share_col:
    st.button("Permalink", on_click=copy_permalink, help="Copy a link to this program and go to it")

st.text_area("Result", key=RESULT_WIDGET, height=200, disabled=True)

html(shortcut_script(), height=0)
bridge.render()
