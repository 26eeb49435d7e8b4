from setuptools import setup, find_packages
from setuptools.command.install_scripts import install_scripts as _install_scripts
from pathlib import Path
import os

# Custom command to modify the generated script
class CustomInstallScripts(_install_scripts):
    def run(self):
        super().run()  # Run the standard install_scripts command
        # Modify the installed scripts
        for script in self.get_outputs():
            if os.path.basename(script) == "vlcrc":
                self.modify_script(script)

    def modify_script(self, script_path):
        # Replace the dynamic entry point resolution with direct import
        custom_content = (
            "#!/usr/bin/python3\n"
            "import sys\n"
            "from vlcrc.cli import main\n"
            "if __name__ == '__main__':\n"
            "    sys.exit(main())\n"
        )

        with open(script_path, "w") as f:
            f.write(custom_content)
        print(f"Customized script: {script_path}")

description = "Control a VLC media player through its RC interface"
long_description = Path("README.md").read_text() if Path("README.md").exists() else description
from vlcrc.version import VERSION

setup(
    name="vlcrc",
    version=VERSION,
    description=description,
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="HiFiBerry",
    author_email="support@hifiberry.com",
    packages=find_packages(exclude=["test", "test.*"]),
    install_requires=[
        "bottle",
        "expiringdict",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
            "requests",
        ],
    },
    entry_points={
        "console_scripts": [
            "vlcrc=vlcrc.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.6",
    include_package_data=True,
    cmdclass={"install_scripts": CustomInstallScripts},
)
