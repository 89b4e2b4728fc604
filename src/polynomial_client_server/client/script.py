"""Load client session scripts from text files or archives."""
from pathlib import Path
import tarfile
import tempfile
import zipfile

import py7zr
from pydantic import FilePath


def load_script(script_path: FilePath) -> str:
    """
    Return the content of a session script.

    Plain text files are read directly. For an archive, the first .txt file found is extracted.

    Supported archive formats:
    - .zip
    - .tar.xz
    - .7z

    :param FilePath script_path: Path to the script file or archive

    :return: Script content, one user input per line
    :rtype: str
    :raises ValueError: If no .txt file is found or format is unsupported
    """
    if script_path.suffix == ".txt":
        return script_path.read_text()

    # Create a temporary directory for safe extraction
    with tempfile.TemporaryDirectory() as tmpdir:
        tmpdir_path = Path(tmpdir)
        if script_path.suffix == ".zip":
            with zipfile.ZipFile(script_path, "r") as zf:
                txt_files = [f for f in zf.namelist() if f.endswith(".txt")]
                if not txt_files:
                    raise ValueError("📄❌ No .txt file found in zip archive")
                zf.extract(txt_files[0], path=tmpdir_path)
                return (tmpdir_path / txt_files[0]).read_text()

        elif script_path.suffixes[-2:] == [".tar", ".xz"]:
            with tarfile.open(script_path, "r:xz") as tf:
                txt_members = [m for m in tf.getmembers() if m.name.endswith(".txt")]
                if not txt_members:
                    raise ValueError("📄❌ No .txt file found in tar.xz archive")
                tf.extract(txt_members[0], path=tmpdir_path, filter="data")
                return (tmpdir_path / txt_members[0].name).read_text()

        elif script_path.suffix == ".7z":
            with py7zr.SevenZipFile(script_path, mode="r") as archive:
                txt_files = [f for f in archive.getnames() if f.endswith(".txt")]
                if not txt_files:
                    raise ValueError("📄❌ No .txt file found in 7z archive")
                archive.extract(targets=[txt_files[0]], path=tmpdir_path)
                return (tmpdir_path / txt_files[0]).read_text()

        else:
            raise ValueError(f"📄❌ Unsupported script format: {script_path.suffix}")
