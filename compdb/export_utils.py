#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""Export utilities for writing a compilation database index to files."""

import os
import json
import logging

import networkx as nx
from networkx.readwrite import json_graph

from compdb.constants import JSON_INDENT, SUPPORTED_GRAPH_FORMATS, ValidationError
from compdb.compile_db_parser import CompileDbIndex

logger = logging.getLogger(__name__)

# Node kinds stored in the 'kind' node attribute
NODE_SOURCE = "source"
NODE_INCLUDE_DIR = "include_dir"
NODE_HEADER = "header"


def export_index_json(filename: str, index: CompileDbIndex) -> None:
    """Write the index as a JSON document.

    Args:
        filename: Output filename
        index: Parsed index
    """
    with open(filename, "w", encoding="utf-8") as f:
        json.dump(index.to_dict(), f, indent=JSON_INDENT)
        f.write("\n")
    logger.info("Exported index to %s", filename)


def build_index_graph(index: CompileDbIndex) -> "nx.DiGraph":
    """Build a directed graph source file -> include directory -> header.

    Node attributes:
        - kind: 'source', 'include_dir' or 'header'
        - label: basename of the path
        - definitions: space-separated definitions (source nodes only)

    Graph attributes c_compiler / cpp_compiler hold the compiler paths
    (empty string when unknown, since GraphML cannot store None).

    Args:
        index: Parsed index

    Returns:
        NetworkX directed graph
    """
    graph = nx.DiGraph()
    graph.graph["c_compiler"] = index.c_compiler or ""
    graph.graph["cpp_compiler"] = index.cpp_compiler or ""

    for directory in index.all_include_dirs:
        graph.add_node(directory, kind=NODE_INCLUDE_DIR, label=os.path.basename(directory))

    for source, info in index.source_files.items():
        graph.add_node(source, kind=NODE_SOURCE, label=os.path.basename(source), definitions=" ".join(info.definitions))
        for directory, headers in info.include_dirs.items():
            graph.add_edge(source, directory)
            for header in headers:
                if not graph.has_node(header):
                    graph.add_node(header, kind=NODE_HEADER, label=os.path.basename(header))
                graph.add_edge(directory, header)

    return graph


def export_index_graph(filename: str, index: CompileDbIndex) -> None:
    """Export the index graph, format chosen by file extension.

    Supports: GraphML (.graphml), GEXF (.gexf), JSON node-link (.json)

    Args:
        filename: Output filename
        index: Parsed index

    Raises:
        ValidationError: If the extension is not a supported graph format
    """
    ext = os.path.splitext(filename)[1].lower()
    if ext not in SUPPORTED_GRAPH_FORMATS:
        raise ValidationError(f"Unsupported graph format '{ext}', expected one of: {', '.join(SUPPORTED_GRAPH_FORMATS)}")

    graph = build_index_graph(index)

    if ext == ".graphml":
        nx.write_graphml(graph, filename)
    elif ext == ".gexf":
        nx.write_gexf(graph, filename)
    else:
        data = json_graph.node_link_data(graph)
        with open(filename, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=JSON_INDENT)

    logger.info("Exported index graph (%d nodes, %d edges) to %s", graph.number_of_nodes(), graph.number_of_edges(), filename)
