from capitalflow.render.sinks import HtmlSink, PageSinks
