import sys
from pathlib import Path

# Los módulos viven en la raíz del repositorio (layout plano)
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)
