"""pdocx_lib: Layout reconstruction of PDF text into styled Word documents."""
