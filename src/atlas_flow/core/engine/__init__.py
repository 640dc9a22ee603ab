"""
Engine do Atlas Flow.

Componentes principais:
    - flow    → `Flow`, `run`: execução de Steps contra o contexto compartilhado
    - builder → `build_flow`, `load_flow`: Flows a partir de definições YAML/JSON

Invariantes:
    - Steps executam exatamente na ordem da lista
    - Um Step que solicita break tem seu resultado mesclado antes da parada
    - O estado de execução é restaurado em qualquer saída, normal ou por falha
"""
