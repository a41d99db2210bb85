"""App — coração do sistema: resolução de receivers e verificação.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- services/: registro de metadata, lookup de secrets, route values,
  extração de eventos e verificador de segurança
- domain/: descriptors e vereditos (sem IO)
- infra/: fonte de configuração e criptografia
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs
- constants/: constantes de roteamento e configuração

Padrão: app executa; api adapta; config configura; utils apoia.
"""
