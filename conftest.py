# =============================================================================
# CONFTEST - Pytest raiz
# =============================================================================
# Garante que o pacote quizboard seja importavel sem instalacao
# =============================================================================

import sys
from pathlib import Path

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))
