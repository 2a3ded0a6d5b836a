from setuptools import setup

setup(
    name="jira-time-log",
    version="0.4.0",
    description="CLI to log time on Jira issues from shorthand arguments",
    packages=["jira_time_log"],
    py_modules=["main"],
    python_requires=">=3.9",
    install_requires=[
        "jira",
        "python-dateutil",
        "python-dotenv",
        "keyring",
        "requests",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'tlog=jira_time_log.cli:main'
        ]
    }
)
