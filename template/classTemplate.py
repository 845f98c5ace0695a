class ${definition.name}:
    """Generated ${date}"""
${@iterate definition.attributes}
    ${item.name}: "${item.type}"
${@endBlock}
${@iterate definition.methods}

    def ${item.name}(self):
        raise NotImplementedError("${item.name}")
${@endBlock}
