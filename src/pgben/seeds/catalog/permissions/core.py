from pgben.seeds.catalog import PermissionSpec as P

# Core modules share one file; each tuple is seeded as its own module catalog.

CIDADAO: tuple[P, ...] = (
    P("cidadao.listar", "Listar cidadãos com filtros e paginação", "UNIDADE"),
    P("cidadao.visualizar", "Visualizar detalhes de um cidadão específico", "UNIDADE"),
    P("cidadao.criar", "Criar um novo cidadão no sistema", "UNIDADE"),
    P("cidadao.editar", "Editar informações de um cidadão existente", "UNIDADE"),
    P("cidadao.excluir", "Excluir um cidadão do sistema", "UNIDADE"),
    P("cidadao.buscar_cpf", "Buscar cidadão por CPF", "UNIDADE"),
    P("cidadao.buscar_nis", "Buscar cidadão por NIS", "UNIDADE"),
    P("cidadao.exportar", "Exportar lista de cidadãos em formato CSV ou Excel", "UNIDADE"),
    P("cidadao.importar", "Importar cidadãos de arquivo CSV ou Excel", "UNIDADE"),
)

BENEFICIO: tuple[P, ...] = (
    P("beneficio.listar", "Listar benefícios com filtros e paginação", "UNIDADE"),
    P("beneficio.visualizar", "Visualizar detalhes de um benefício específico", "UNIDADE"),
    P("beneficio.criar", "Criar um novo tipo de benefício no sistema", "GLOBAL"),
    P("beneficio.editar", "Editar informações de um tipo de benefício existente", "GLOBAL"),
    P("beneficio.excluir", "Excluir um tipo de benefício do sistema", "GLOBAL"),
    P("beneficio.conceder", "Conceder um benefício a um cidadão", "UNIDADE"),
    P("beneficio.revogar", "Revogar um benefício concedido a um cidadão", "UNIDADE"),
    P("beneficio.suspender", "Suspender temporariamente um benefício concedido", "UNIDADE"),
    P("beneficio.reativar", "Reativar um benefício suspenso", "UNIDADE"),
    P("beneficio.renovar", "Renovar um benefício com prazo de validade", "UNIDADE"),
)

SOLICITACAO: tuple[P, ...] = (
    P("solicitacao.listar", "Listar solicitações com filtros e paginação", "UNIDADE"),
    P("solicitacao.visualizar", "Visualizar detalhes de uma solicitação específica", "UNIDADE"),
    P("solicitacao.criar", "Criar uma nova solicitação no sistema", "UNIDADE"),
    P("solicitacao.editar", "Editar informações de uma solicitação existente", "UNIDADE"),
    P("solicitacao.excluir", "Excluir uma solicitação do sistema", "UNIDADE"),
    P("solicitacao.status.visualizar", "Visualizar histórico de status de uma solicitação", "UNIDADE"),
    P("solicitacao.status.atualizar", "Atualizar o status de uma solicitação", "UNIDADE"),
    P("solicitacao.observacao.adicionar", "Adicionar observação a uma solicitação", "UNIDADE"),
    P("solicitacao.observacao.editar", "Editar observação de uma solicitação", "UNIDADE"),
    P("solicitacao.observacao.excluir", "Excluir observação de uma solicitação", "UNIDADE"),
    P("solicitacao.aprovacao.criar", "Criar solicitação de aprovação de ação crítica", "USUARIO"),
    P("solicitacao.aprovacao.processar", "Aprovar ou rejeitar solicitações de aprovação", "UNIDADE"),
    P("solicitacao.aprovacao.listar", "Listar solicitações de aprovação", "UNIDADE"),
)

USUARIO: tuple[P, ...] = (
    P("usuario.listar", "Listar usuários do sistema", "UNIDADE"),
    P("usuario.visualizar", "Visualizar detalhes de um usuário", "UNIDADE"),
    P("usuario.criar", "Criar um novo usuário", "GLOBAL"),
    P("usuario.editar", "Editar dados de um usuário", "GLOBAL"),
    P("usuario.excluir", "Excluir um usuário do sistema", "GLOBAL"),
    P("usuario.status.alterar", "Ativar ou inativar um usuário", "GLOBAL"),
    P("usuario.senha.resetar", "Resetar a senha de um usuário", "GLOBAL"),
    P("usuario.permissao.visualizar", "Visualizar permissões de um usuário", "GLOBAL"),
    P("usuario.permissao.gerenciar", "Conceder e revogar permissões de usuários", "GLOBAL"),
    P("usuario.perfil.visualizar", "Visualizar o próprio perfil", "USUARIO"),
    P("usuario.perfil.editar", "Editar o próprio perfil", "USUARIO"),
)

DOCUMENTO: tuple[P, ...] = (
    P("documento.listar", "Listar documentos", "UNIDADE"),
    P("documento.visualizar", "Visualizar detalhes de um documento", "UNIDADE"),
    P("documento.upload", "Enviar um novo documento", "UNIDADE"),
    P("documento.download", "Baixar um documento", "UNIDADE"),
    P("documento.excluir", "Excluir um documento", "UNIDADE"),
    P("documento.substituir", "Substituir um documento existente", "UNIDADE"),
    P("documento.verificar", "Verificar a autenticidade de um documento", "UNIDADE"),
)

AUDITORIA: tuple[P, ...] = (
    P("auditoria.listar", "Listar eventos de auditoria", "GLOBAL"),
    P("auditoria.visualizar", "Visualizar detalhes de um evento de auditoria", "GLOBAL"),
    P("auditoria.exportar", "Exportar trilha de auditoria", "GLOBAL"),
)

UNIDADE: tuple[P, ...] = (
    P("unidade.listar", "Listar unidades", "GLOBAL"),
    P("unidade.visualizar", "Visualizar detalhes de uma unidade", "UNIDADE"),
    P("unidade.criar", "Criar uma nova unidade", "GLOBAL"),
    P("unidade.editar", "Editar dados de uma unidade", "GLOBAL"),
    P("unidade.status.alterar", "Ativar ou inativar uma unidade", "GLOBAL"),
    P("unidade.setor.gerenciar", "Gerenciar setores de uma unidade", "GLOBAL"),
)

RELATORIO: tuple[P, ...] = (
    P("relatorio.listar", "Listar relatórios disponíveis", "UNIDADE"),
    P("relatorio.gerar", "Gerar relatórios", "UNIDADE"),
    P("relatorio.exportar", "Exportar relatórios", "UNIDADE"),
)

CONFIGURACAO: tuple[P, ...] = (
    P("configuracao.visualizar", "Visualizar configurações do sistema", "GLOBAL"),
    P("configuracao.editar", "Editar configurações do sistema", "GLOBAL"),
    P("configuracao.aprovacao.gerenciar", "Gerenciar ações críticas e aprovadores", "GLOBAL"),
    P("configuracao.template.gerenciar", "Gerenciar templates de notificação", "GLOBAL"),
)

NOTIFICACAO: tuple[P, ...] = (
    P("notificacao.listar", "Listar as próprias notificações", "USUARIO"),
    P("notificacao.enviar", "Enviar notificações", "UNIDADE"),
    P("notificacao.template.visualizar", "Visualizar templates de notificação", "GLOBAL"),
)

METRICA: tuple[P, ...] = (
    P("metrica.visualizar", "Visualizar métricas do sistema", "GLOBAL"),
    P("metrica.dashboard", "Visualizar dashboard de métricas", "UNIDADE"),
    P("metrica.exportar", "Exportar métricas", "GLOBAL"),
)
