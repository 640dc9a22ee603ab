"""
Core do Atlas Flow.

Componentes principais:
    - pipeline → contratos de Step, introspector de chamáveis, providers
                 de valores default e registry de Steps nomeados
    - engine   → Flow (loop de execução, binding, merge) e builder
    - config   → carregamento e deep-merge de definições declarativas
    - errors / exceptions → payloads e exceções tipadas do engine

Limites explícitos:
    - Não contém lógica de domínio
    - Não implementa container de injeção de dependências
    - Não mapeia caminhos de requisição para arquivos de Step
"""
