"""
/setup.py

Packaging for the chat history statistics tools.
"""

import setuptools

with open("requirements.txt", "r", encoding="utf-8") as file:
    requirements = file.read().splitlines()

setuptools.setup(
    name="chat-history-stats",
    version="0.1.0",
    description="Merge exported chat transcripts and compute conversation statistics",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src", exclude=["*.tests"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "history_stats = history_report.commands:main",
        ]
    },
)
