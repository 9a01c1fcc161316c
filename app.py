"""ViralScript AI launcher.

`streamlit run app.py` is the Streamlit Cloud default entry; it renders the
same page as `streamlit run streamlit_app.py`.
"""

from streamlit_app import main

if __name__ == "__main__":
    main()
