"""Deployment entrypoint for the field builder.

Hosting platforms look for ``streamlit_app.py``; the page itself lives in
``Home.py`` so it can also be launched directly with ``streamlit run Home.py``.
"""

from Home import main

if __name__ == "__main__":
    main()
