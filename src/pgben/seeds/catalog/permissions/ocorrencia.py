from pgben.seeds.catalog import PermissionSpec as P

MODULO = "ocorrencia"

PERMISSOES: tuple[P, ...] = (
    P("ocorrencia.listar", "Listar ocorrências", "UNIDADE"),
    P("ocorrencia.visualizar", "Visualizar detalhes de ocorrência", "UNIDADE"),
    P("ocorrencia.criar", "Criar nova ocorrência", "UNIDADE"),
    P("ocorrencia.editar", "Editar ocorrência existente", "UNIDADE"),
    P("ocorrencia.excluir", "Excluir ocorrência", "UNIDADE"),
    P("ocorrencia.abrir", "Abrir nova ocorrência", "UNIDADE"),
    P("ocorrencia.fechar", "Fechar ocorrência", "UNIDADE"),
    P("ocorrencia.reabrir", "Reabrir ocorrência fechada", "UNIDADE"),
    P("ocorrencia.cancelar", "Cancelar ocorrência", "UNIDADE"),
    P("ocorrencia.prioridade.alterar", "Alterar prioridade da ocorrência", "UNIDADE"),
    P("ocorrencia.prioridade.critica", "Definir ocorrência como crítica", "UNIDADE"),
    P("ocorrencia.atribuir", "Atribuir ocorrência a usuário", "UNIDADE"),
    P("ocorrencia.reatribuir", "Reatribuir ocorrência para outro usuário", "UNIDADE"),
    P("ocorrencia.assumir", "Assumir responsabilidade pela ocorrência", "USUARIO"),
    P("ocorrencia.comentar", "Adicionar comentário à ocorrência", "UNIDADE"),
    P("ocorrencia.comentario.editar", "Editar comentário próprio", "USUARIO"),
    P("ocorrencia.comentario.excluir", "Excluir comentário", "UNIDADE"),
    P("ocorrencia.atualizar", "Atualizar status da ocorrência", "UNIDADE"),
    P("ocorrencia.anexo.adicionar", "Adicionar anexo à ocorrência", "UNIDADE"),
    P("ocorrencia.anexo.visualizar", "Visualizar anexos da ocorrência", "UNIDADE"),
    P("ocorrencia.anexo.download", "Fazer download de anexos", "UNIDADE"),
    P("ocorrencia.anexo.excluir", "Excluir anexo da ocorrência", "UNIDADE"),
    P("ocorrencia.categoria.alterar", "Alterar categoria da ocorrência", "UNIDADE"),
    P("ocorrencia.categoria.criar", "Criar nova categoria de ocorrência", "GLOBAL"),
    P("ocorrencia.categoria.editar", "Editar categoria de ocorrência", "GLOBAL"),
    P("ocorrencia.categoria.excluir", "Excluir categoria de ocorrência", "GLOBAL"),
    P("ocorrencia.escalar", "Escalar ocorrência para nível superior", "UNIDADE"),
    P("ocorrencia.desescalar", "Desescalar ocorrência", "UNIDADE"),
    P("ocorrencia.notificar", "Enviar notificação sobre ocorrência", "UNIDADE"),
    P("ocorrencia.notificacao.configurar", "Configurar notificações automáticas", "GLOBAL"),
    P("ocorrencia.relatorio.gerar", "Gerar relatório de ocorrências", "UNIDADE"),
    P("ocorrencia.relatorio.exportar", "Exportar relatório de ocorrências", "UNIDADE"),
    P("ocorrencia.estatistica.visualizar", "Visualizar estatísticas de ocorrências", "UNIDADE"),
    P("ocorrencia.historico.visualizar", "Visualizar histórico da ocorrência", "UNIDADE"),
    P("ocorrencia.historico.exportar", "Exportar histórico da ocorrência", "UNIDADE"),
    P("ocorrencia.configuracao.visualizar", "Visualizar configurações de ocorrências", "GLOBAL"),
    P("ocorrencia.configuracao.editar", "Editar configurações de ocorrências", "GLOBAL"),
    P("ocorrencia.template.criar", "Criar template de ocorrência", "GLOBAL"),
    P("ocorrencia.template.editar", "Editar template de ocorrência", "GLOBAL"),
    P("ocorrencia.auditoria.visualizar", "Visualizar auditoria de ocorrências", "UNIDADE"),
    P("ocorrencia.auditoria.exportar", "Exportar dados de auditoria", "UNIDADE"),
)
