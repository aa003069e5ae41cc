#!/usr/bin/env python3
"""
Main entry point for the agro credit simulator.
Run with: streamlit run main.py
"""

from ui.main_ui import main

if __name__ == "__main__":
    main()
