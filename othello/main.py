"""
Tkinter GUI で起動するためのスクリプト（PyInstaller のエントリでもある）。

`python -m othello.main` でも、このファイルを直接実行しても GUI が開く。
直接実行時は相対インポートが使えないため、親ディレクトリを `sys.path` に追加して
`othello.gui_tk` を解決する。
"""

try:
    from .gui_tk import main
except ImportError:
    # 単体ファイル実行に対応: python othello/main.py
    import os
    import sys
    sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
    from othello.gui_tk import main

if __name__ == "__main__":
    main()
